"""
Analyzer module.

Contains hierarchy, common ancestor, field type and polymorphism
resolution, and the resolver assembling the resolved model.
"""

from __future__ import annotations

from .analyzer import TypeResolver
from .common_ancestor import CommonAncestorResolver
from .field_mapper import FieldTypeMapper
from .hierarchy import HierarchyResolver
from .ir_nodes import (
    EnumRef,
    FieldWarning,
    ListOf,
    ObjectRef,
    Primitive,
    ResolvedClass,
    ResolvedDeserializer,
    ResolvedEnum,
    ResolvedEnumMember,
    ResolvedField,
    ResolvedModel,
    TargetType,
    UnionRef,
    WarningKind,
)
from .polymorphism import DISCRIMINANT_FIELD, PolymorphismAnalyzer

__all__ = [
    "TargetType",
    "Primitive",
    "ListOf",
    "EnumRef",
    "ObjectRef",
    "UnionRef",
    "ResolvedEnumMember",
    "ResolvedEnum",
    "ResolvedField",
    "ResolvedClass",
    "ResolvedDeserializer",
    "ResolvedModel",
    "FieldWarning",
    "WarningKind",
    "HierarchyResolver",
    "CommonAncestorResolver",
    "FieldTypeMapper",
    "PolymorphismAnalyzer",
    "TypeResolver",
    "DISCRIMINANT_FIELD",
]
