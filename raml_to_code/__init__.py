"""RAML to Code type resolver

A Python package for resolving RAML type declarations into a flattened,
backend-agnostic model: inheritance chains, union common ancestors,
enum identifiers and polymorphic deserializers, ready for code emitters.
"""

__version__ = "1.0.0"

from .pipeline import (
    CycleError,
    PipelineResolver,
    ResolutionError,
    ResolvedModel,
    ResolverConfig,
    SchemaError,
)

__all__ = [
    "PipelineResolver",
    "ResolverConfig",
    "ResolvedModel",
    "ResolutionError",
    "SchemaError",
    "CycleError",
]
