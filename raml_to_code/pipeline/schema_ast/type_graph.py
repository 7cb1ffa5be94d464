"""
Type graph builder.

Normalizes raw type declarations into ``TypeNode``s. Every declared type
string is parsed into a ``TypeExpr`` here, once; an unresolvable parent
type is not an error but a root whose kind is inferred from the string.
"""

from __future__ import annotations

import logging
from typing import Any

from ..errors import SchemaError
from .nodes import (
    ApiSchema,
    ArrayType,
    MapType,
    NamedType,
    PropertySpec,
    RawType,
    TypeExpr,
    TypeGraph,
    TypeKind,
    TypeNode,
    UnionType,
)

logger = logging.getLogger(__name__)

# Built-in scalar type keywords (used for kind inference only)
SCALAR_KEYWORDS = {
    "any",
    "string",
    "number",
    "integer",
    "boolean",
    "date-only",
    "time-only",
    "datetime-only",
    "datetime",
    "file",
    "nil",
}

ARRAY_SUFFIX = "[]"
MAP_SUFFIX = "{}"
UNION_SEPARATOR = "|"
NAMESPACE_SEPARATOR = "."


def _strip_enclosing_parens(text: str) -> str:
    """Remove parentheses wrapping the whole expression, e.g. ``(A | B)``."""
    while text.startswith("(") and text.endswith(")"):
        depth = 0
        for i, char in enumerate(text):
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
            if depth == 0 and i < len(text) - 1:
                # The first paren closes before the end: not enclosing
                return text
        text = text[1:-1].strip()
    return text


def parse_type_expression(raw: str) -> TypeExpr:
    """
    Parse a declared type string into a tagged type expression.

    Suffixes are checked before the union marker, so ``A | B[]`` is an
    array of the union ``A | B``.

    Args:
        raw: The declared type string

    Returns:
        The parsed TypeExpr
    """
    text = _strip_enclosing_parens(raw.strip())

    if text.endswith(ARRAY_SUFFIX):
        element = text
        dimensions = 0
        while element.endswith(ARRAY_SUFFIX):
            element = element[: -len(ARRAY_SUFFIX)].rstrip()
            dimensions += 1
        return ArrayType(raw=text, element=parse_type_expression(element), dimensions=dimensions)

    if text.endswith(MAP_SUFFIX):
        return MapType(raw=text, value=parse_type_expression(text[: -len(MAP_SUFFIX)]))

    if text.find(UNION_SEPARATOR) > 0:
        members = tuple(parse_type_expression(m) for m in text.split(UNION_SEPARATOR) if m.strip())
        if len(members) == 1:
            return members[0]
        return UnionType(raw=text, members=members)

    if text.find(NAMESPACE_SEPARATOR) > 0:
        qualifier, _, name = text.rpartition(NAMESPACE_SEPARATOR)
        return NamedType(raw=text, name=name, qualifier=qualifier)

    return NamedType(raw=text, name=text)


class TypeGraphBuilder:
    """Builds the TypeGraph from an ApiSchema."""

    def build(self, schema: ApiSchema) -> TypeGraph:
        """
        Normalize every raw type declaration.

        Args:
            schema: The parsed schema

        Returns:
            TypeGraph holding one TypeNode per declared type
        """
        nodes = {name: self._build_node(raw_type, schema) for name, raw_type in schema.types.items()}

        logger.debug("Built type graph with %d nodes", len(nodes))
        return TypeGraph(
            title=schema.title,
            nodes=nodes,
            resources=tuple(schema.resources),
        )

    def _build_node(self, raw_type: RawType, schema: ApiSchema) -> TypeNode:
        """Normalize a single type declaration."""
        path = f"types/{raw_type.name}"
        type_string = self._effective_type_string(raw_type.type, raw_type.items, raw_type.enum is not None)
        declared_type = parse_type_expression(type_string)

        parent_name = None
        if isinstance(declared_type, NamedType) and declared_type.raw in schema.types:
            parent_name = declared_type.raw

        properties = {}
        for prop_name, prop_value in raw_type.properties.items():
            prop = self._build_property(prop_name, prop_value, f"{path}/properties/{prop_name}")
            properties[prop.name] = prop

        enum_values = tuple(raw_type.enum) if raw_type.enum is not None else None

        return TypeNode(
            name=raw_type.name,
            kind=self._infer_kind(declared_type, parent_name, enum_values),
            parent_name=parent_name,
            declared_type=declared_type,
            properties=properties,
            enum_values=enum_values,
            description=raw_type.description,
        )

    def _effective_type_string(self, type_string: str | None, items: str | None, has_enum: bool) -> str:
        """Fill in the implicit type of a declaration."""
        if type_string is None:
            if items is not None:
                type_string = "array"
            elif has_enum:
                type_string = "string"
            else:
                type_string = "object"

        # `type: array` + `items: X` is the long form of `X[]`
        if type_string.strip() == "array" and items:
            return f"{items.strip()}{ARRAY_SUFFIX}"

        return type_string

    def _infer_kind(self, declared_type: TypeExpr, parent_name: str | None, enum_values: tuple[Any, ...] | None) -> TypeKind:
        """Infer the kind of a declared type."""
        if enum_values is not None:
            return TypeKind.ENUM
        if parent_name is not None:
            return TypeKind.OBJECT
        if isinstance(declared_type, ArrayType):
            return TypeKind.ARRAY
        if isinstance(declared_type, UnionType):
            return TypeKind.UNION
        if isinstance(declared_type, MapType):
            return TypeKind.MAP
        if isinstance(declared_type, NamedType):
            if declared_type.raw == "object":
                return TypeKind.OBJECT
            if declared_type.raw in SCALAR_KEYWORDS:
                return TypeKind.SCALAR
            return TypeKind.REFERENCE
        raise TypeError(f"Unknown type expression: {type(declared_type).__name__}")

    def _build_property(self, name: str, value: Any, path: str) -> PropertySpec:
        """Normalize a property declaration."""
        required = True
        if name.endswith("?"):
            name = name[:-1]
            required = False

        if value is None or isinstance(value, str):
            type_string = self._effective_property_type(value, None, False)
            return PropertySpec(
                name=name,
                declared_type=parse_type_expression(type_string),
                required=required,
            )

        if not isinstance(value, dict):
            raise SchemaError(f"Unsupported property declaration of kind {type(value).__name__}", path)

        if "required" in value:
            if not isinstance(value["required"], bool):
                raise SchemaError("'required' must be a boolean", path)
            required = value["required"]

        raw_children = value.get("properties") or {}
        if not isinstance(raw_children, dict):
            raise SchemaError("'properties' must be a mapping", path)
        children = tuple(self._build_property(str(k), v, f"{path}/properties/{k}") for k, v in raw_children.items())

        enum = value.get("enum")
        if enum is not None and not isinstance(enum, list):
            raise SchemaError("'enum' must be a list", path)

        type_string = self._effective_property_type(
            self._type_facet(value.get("type"), path),
            self._items_facet(value.get("items"), path),
            bool(children),
        )

        return PropertySpec(
            name=name,
            declared_type=parse_type_expression(type_string),
            required=required,
            children=children,
            enum_values=tuple(enum) if enum is not None else None,
            description=str(value.get("description") or ""),
        )

    def _effective_property_type(self, type_string: str | None, items: str | None, has_children: bool) -> str:
        """Fill in the implicit type of a property."""
        if type_string is None:
            if items is not None:
                type_string = "array"
            elif has_children:
                type_string = "object"
            else:
                type_string = "string"

        if type_string.strip() == "array" and items:
            return f"{items.strip()}{ARRAY_SUFFIX}"
        return type_string

    def _type_facet(self, value: Any, path: str) -> str | None:
        if value is None:
            return None
        if isinstance(value, list):
            if len(value) != 1:
                raise SchemaError(f"Multiple inheritance is not supported: {value}", path)
            value = value[0]
        if not isinstance(value, str):
            raise SchemaError(f"'type' must be a string, got {type(value).__name__}", path)
        return value

    def _items_facet(self, value: Any, path: str) -> str | None:
        if isinstance(value, dict):
            return self._type_facet(value.get("type"), f"{path}/items")
        return self._type_facet(value, f"{path}/items")
