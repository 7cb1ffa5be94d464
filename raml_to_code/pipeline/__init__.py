"""
Pipeline - RAML type resolution and polymorphism engine.

This module provides a multi-phase architecture for turning the type
section of a RAML document into a resolved model that code emitters
consume:

1. Phase 1 (Parser): Parse the document into an ApiSchema
2. Phase 2 (Type graph): Normalize declarations into a TypeGraph
3. Phase 3 (Analyzer): Resolve hierarchies, field types and polymorphism
"""

from __future__ import annotations

from .analyzer import ResolvedModel, TypeResolver
from .backends import get_backend
from .config import ResolverConfig
from .errors import CycleError, FieldMappingError, ResolutionError, SchemaError, UnsupportedConstructError
from .generator import PipelineResolver
from .schema_ast import load_schema_document

__all__ = [
    "PipelineResolver",
    "ResolverConfig",
    "ResolvedModel",
    "TypeResolver",
    "get_backend",
    "load_schema_document",
    "ResolutionError",
    "SchemaError",
    "CycleError",
    "FieldMappingError",
    "UnsupportedConstructError",
]
