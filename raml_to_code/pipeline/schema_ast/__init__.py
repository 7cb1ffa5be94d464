"""
Schema AST module.

Contains the raw schema nodes, the document parser and the type graph
builder.
"""

from __future__ import annotations

from .nodes import (
    ApiSchema,
    ArrayType,
    MapType,
    NamedType,
    PropertySpec,
    RawMethod,
    RawResource,
    RawType,
    TypeExpr,
    TypeGraph,
    TypeKind,
    TypeNode,
    UnionType,
)
from .parser import SchemaParser, load_schema_document
from .type_graph import TypeGraphBuilder, parse_type_expression

__all__ = [
    "ApiSchema",
    "RawType",
    "RawMethod",
    "RawResource",
    "TypeExpr",
    "NamedType",
    "ArrayType",
    "MapType",
    "UnionType",
    "TypeKind",
    "PropertySpec",
    "TypeNode",
    "TypeGraph",
    "SchemaParser",
    "TypeGraphBuilder",
    "load_schema_document",
    "parse_type_expression",
]
