"""
Field type mapper.

Maps a property's declared type expression into a backend-agnostic
TargetType, in strict precedence order:

1. enum literals              -> EnumRef
2. backend primitive table    -> Primitive
3. nested array (``T[][]``)   -> unsupported, field dropped
4. array (``T[]``)            -> ListOf(element)
5. map (``T{}``)              -> unsupported, field dropped
6. union (``A | B``)          -> UnionRef(common ancestor, members)
7. dotted reference           -> last segment, then 8.
8. anything else              -> ObjectRef (left opaque, never verified)
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from ...utils import sanitize_identifier, title_case
from ..errors import FieldMappingError, SchemaError, UnsupportedConstructError
from ..schema_ast.nodes import ArrayType, MapType, NamedType, PropertySpec, TypeExpr, UnionType
from .common_ancestor import CommonAncestorResolver
from .ir_nodes import EnumRef, ListOf, ObjectRef, Primitive, ResolvedEnum, ResolvedEnumMember, TargetType, UnionRef

logger = logging.getLogger(__name__)


class PrimitiveLookup(Protocol):
    """Anything that can look up a backend primitive by schema type name."""

    def lookup(self, name: str) -> str | None: ...


def enum_name(owner: str, property_name: str = "") -> str:
    """Deterministic name of the enum generated for a type or property."""
    return title_case(owner) + title_case(property_name)


def union_member_name(expr: TypeExpr) -> str:
    """Name a union member is known by for common ancestor resolution."""
    if isinstance(expr, NamedType):
        return expr.name
    return expr.raw


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class FieldTypeMapper:
    """Maps declared types to target types for one backend."""

    def __init__(self, primitives: PrimitiveLookup, ancestor_resolver: CommonAncestorResolver):
        """
        Initialize the mapper.

        Args:
            primitives: The backend's primitive lookup table
            ancestor_resolver: Resolver used to type union fields
        """
        self.primitives = primitives
        self.ancestor_resolver = ancestor_resolver

    def map_property(self, owner: str, prop: PropertySpec) -> TargetType:
        """
        Map a property of a type.

        Args:
            owner: Name of the type the field is resolved on
            prop: The property

        Returns:
            The resolved TargetType

        Raises:
            UnsupportedConstructError: for maps and nested arrays
            FieldMappingError: when the property cannot be mapped at all
        """
        if prop.is_enum:
            return EnumRef(name=enum_name(owner, prop.name))
        return self.map_expression(prop.declared_type)

    def map_expression(self, expr: TypeExpr) -> TargetType:
        """Map a type expression, recursing into arrays and unions."""
        primitive = self.primitives.lookup(expr.raw)
        if primitive is not None:
            return Primitive(name=primitive)

        if isinstance(expr, ArrayType):
            if expr.dimensions > 1:
                raise UnsupportedConstructError("bidimensional array", expr.raw)
            return ListOf(element=self.map_expression(expr.element))

        if isinstance(expr, MapType):
            raise UnsupportedConstructError("map", expr.raw)

        if isinstance(expr, UnionType):
            members = tuple(self.map_expression(m) for m in expr.members)
            common_ancestor = self.ancestor_resolver.resolve([union_member_name(m) for m in expr.members])
            return UnionRef(common_ancestor=common_ancestor, members=members)

        if isinstance(expr, NamedType):
            if not expr.name:
                raise FieldMappingError(f"Unsupported type: '{expr.raw}'")
            return ObjectRef(type_name=expr.name)

        raise FieldMappingError(f"Unknown type expression: {type(expr).__name__}")

    def map_enum(self, owner: str, property_name: str, values: tuple[Any, ...], value_type: str) -> ResolvedEnum:
        """
        Build the enum for a type (``property_name == ""``) or a property.

        String literals keep a quoted literal and are named after their
        text; numeric literals are named ``E<value>``, so the number 2 and
        the string "2" never collide.
        """
        members = []
        seen: set[str] = set()
        for value in values:
            member = self._enum_member(value, owner, property_name)

            name = member.name
            suffix = 2
            while name in seen:
                name = f"{member.name}_{suffix}"
                suffix += 1
            if name != member.name:
                logger.warning("Enum %s: member name %s already used, renamed to %s", enum_name(owner, property_name), member.name, name)
                member = ResolvedEnumMember(name=name, value=member.value, is_string=member.is_string)

            seen.add(name)
            members.append(member)

        return ResolvedEnum(
            name=enum_name(owner, property_name),
            owner=owner,
            property_name=property_name,
            value_type=value_type,
            members=tuple(members),
        )

    def _enum_member(self, value: Any, owner: str, property_name: str) -> ResolvedEnumMember:
        if isinstance(value, bool):
            text = "true" if value else "false"
            return ResolvedEnumMember(name=sanitize_identifier(text), value=text, is_string=True)
        if isinstance(value, str):
            return ResolvedEnumMember(name=sanitize_identifier(value), value=value, is_string=True)
        if isinstance(value, (int, float)):
            text = _format_number(value)
            return ResolvedEnumMember(name=sanitize_identifier(f"e{text}"), value=value, is_string=False)

        path = f"types/{owner}" + (f"/properties/{property_name}" if property_name else "")
        raise SchemaError(f"Unsupported enum literal {value!r}", path)
