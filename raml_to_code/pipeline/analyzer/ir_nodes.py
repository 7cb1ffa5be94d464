"""
Resolved model node definitions.

These nodes represent the analyzed and resolved schema, ready for code
emission. Inheritance is flattened, union fields carry their common
ancestor and every enum has sanitized member names. All records are
frozen: emitters only read them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..schema_ast.nodes import TypeKind

# ---------------------------------------------------------------------------
# Target types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TargetType:
    """Base class for resolved field types."""

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class Primitive(TargetType):
    """A backend primitive, named as the backend spells it."""

    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "primitive", "name": self.name}


@dataclass(frozen=True)
class ListOf(TargetType):
    """A list of another target type."""

    element: TargetType = field(default_factory=Primitive)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "list", "element": self.element.to_dict()}


@dataclass(frozen=True)
class EnumRef(TargetType):
    """Reference to a generated enum."""

    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "enum", "name": self.name}


@dataclass(frozen=True)
class ObjectRef(TargetType):
    """Reference to a type by name (not necessarily declared)."""

    type_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "object", "name": self.type_name}


@dataclass(frozen=True)
class UnionRef(TargetType):
    """A union, typed as the nearest common ancestor of its members."""

    common_ancestor: str = ""
    members: tuple[TargetType, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "union",
            "common_ancestor": self.common_ancestor,
            "members": [m.to_dict() for m in self.members],
        }


# ---------------------------------------------------------------------------
# Resolved records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResolvedEnumMember:
    """A single enum member."""

    name: str = ""  # Sanitized identifier
    value: Any = None  # Literal value from the schema
    is_string: bool = True

    @property
    def literal(self) -> str:
        """The value as it should appear in source, strings quoted."""
        if self.is_string:
            return f'"{self.value}"'
        return str(self.value)


@dataclass(frozen=True)
class ResolvedEnum:
    """An enum definition, either a type alias or a field's inline enum."""

    name: str = ""
    owner: str = ""  # Owning type name
    property_name: str = ""  # "" for type-level enums
    value_type: str = "string"
    members: tuple[ResolvedEnumMember, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "owner": self.owner,
            "property_name": self.property_name,
            "value_type": self.value_type,
            "members": [{"name": m.name, "value": m.value, "literal": m.literal} for m in self.members],
        }


@dataclass(frozen=True)
class ResolvedField:
    """A field of a resolved class."""

    name: str = ""
    target_type: TargetType = field(default_factory=TargetType)
    required: bool = True

    # False when the field is inherited unchanged and emitted on an ancestor
    is_member: bool = True

    # Names that became required only for this use of the referenced type
    required_child_overrides: tuple[str, ...] = ()

    # Member type names, for union fields
    union_members: tuple[str, ...] | None = None

    description: str = ""

    @property
    def is_list(self) -> bool:
        return isinstance(self.target_type, ListOf)

    def to_dict(self) -> dict[str, Any]:
        d = {
            "name": self.name,
            "type": self.target_type.to_dict(),
            "required": self.required,
            "is_member": self.is_member,
            "required_child_overrides": list(self.required_child_overrides),
        }
        if self.union_members is not None:
            d["union_members"] = list(self.union_members)
        return d


@dataclass(frozen=True)
class ResolvedClass:
    """A resolved, flattened type."""

    name: str = ""
    kind: TypeKind = TypeKind.OBJECT
    parent_name: str | None = None

    # Ancestors, nearest first, self excluded
    ancestors: tuple[str, ...] = ()

    # Flattened fields, root-to-self declaration order
    fields: dict[str, ResolvedField] = field(default_factory=dict)

    # Direct children, sorted
    children: tuple[str, ...] = ()

    is_abstract: bool = False
    has_children: bool = False
    has_required_properties: bool = False

    # Name of the discriminant-dispatch construct ("" when none)
    deserializer_target: str = ""

    # For enum types
    enum_def: ResolvedEnum | None = None

    # For array/union/scalar/reference types
    alias_target: TargetType | None = None

    description: tuple[str, ...] = ()

    @property
    def has_parent(self) -> bool:
        return self.parent_name is not None

    @property
    def member_fields(self) -> list[ResolvedField]:
        """Fields emitted on this class itself."""
        return [f for f in self.fields.values() if f.is_member]

    def to_dict(self) -> dict[str, Any]:
        d = {
            "name": self.name,
            "kind": self.kind.value,
            "parent_name": self.parent_name,
            "ancestors": list(self.ancestors),
            "children": list(self.children),
            "is_abstract": self.is_abstract,
            "has_children": self.has_children,
            "has_required_properties": self.has_required_properties,
            "deserializer_target": self.deserializer_target,
            "fields": [f.to_dict() for f in self.fields.values()],
        }
        if self.enum_def is not None:
            d["enum"] = self.enum_def.name
        if self.alias_target is not None:
            d["alias_target"] = self.alias_target.to_dict()
        return d


@dataclass(frozen=True)
class ResolvedDeserializer:
    """A discriminant-dispatch construct for an abstract parent type."""

    name: str = ""
    base: str = ""
    children: tuple[str, ...] = ()
    discriminant_field: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "base": self.base,
            "children": list(self.children),
            "discriminant_field": self.discriminant_field,
        }


class WarningKind(Enum):
    """Kind of a non-fatal resolution problem."""

    UNSUPPORTED_CONSTRUCT = "unsupported_construct"
    FIELD_MAPPING = "field_mapping"


@dataclass(frozen=True)
class FieldWarning:
    """A field (or type alias) that was dropped from the model."""

    kind: WarningKind = WarningKind.FIELD_MAPPING
    type_name: str = ""
    field_name: str = ""  # "" when the type alias itself was dropped
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "type_name": self.type_name,
            "field_name": self.field_name,
            "message": self.message,
        }


@dataclass(frozen=True)
class ResolvedModel:
    """The complete resolved model handed to emitters."""

    title: str = ""
    backend: str = ""

    # All resolved classes (in emission order)
    classes: tuple[ResolvedClass, ...] = ()

    # All enum definitions, type-level and field-level
    enums: tuple[ResolvedEnum, ...] = ()

    deserializers: tuple[ResolvedDeserializer, ...] = ()

    # Lossy output markers
    warnings: tuple[FieldWarning, ...] = ()

    # Parent link of every declared type, ignored ones included
    parents: dict[str, str | None] = field(default_factory=dict)

    def get_class(self, name: str) -> ResolvedClass | None:
        for class_def in self.classes:
            if class_def.name == name:
                return class_def
        return None

    def ancestor_chain(self, name: str) -> list[str]:
        """Re-derive a type's chain (self first) from parent links."""
        chain = []
        current = name if name in self.parents else None
        while current is not None:
            chain.append(current)
            current = self.parents.get(current)
        return chain

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "backend": self.backend,
            "classes": [c.to_dict() for c in self.classes],
            "enums": [e.to_dict() for e in self.enums],
            "deserializers": [d.to_dict() for d in self.deserializers],
            "warnings": [w.to_dict() for w in self.warnings],
        }
