"""
Errors raised while building and resolving the type graph.
"""

from __future__ import annotations


class ResolutionError(Exception):
    """Base class for all type resolution errors."""

    pass


class SchemaError(ResolutionError):
    """Raised when a type or property declaration is malformed.

    Aborts the whole run.
    """

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class CycleError(ResolutionError):
    """Raised when an inheritance chain revisits a type name.

    Aborts the whole run.
    """

    def __init__(self, chain: list[str]):
        self.chain = list(chain)
        super().__init__(f"Inheritance cycle detected: {' -> '.join(self.chain)}")


class FieldMappingError(ResolutionError):
    """Raised when a single property cannot be mapped.

    The assembler skips the field and keeps building the class.
    """

    pass


class UnsupportedConstructError(FieldMappingError):
    """Raised for constructs no backend supports (maps, nested arrays).

    The field is dropped with a warning; output is degraded, not failed.
    """

    def __init__(self, construct: str, type_expression: str):
        self.construct = construct
        self.type_expression = type_expression
        super().__init__(f"No support for {construct} '{type_expression}', field ignored")
