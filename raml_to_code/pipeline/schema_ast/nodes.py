"""
Node definitions for the raw schema and the normalized type graph.

The raw nodes mirror what the schema parser hands over (types and
resources, still loosely typed). The graph nodes are the normalized form
the resolver works on: every declared type string is parsed once into a
tagged ``TypeExpr`` so later phases never switch on raw strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Raw schema (parser output)
# ---------------------------------------------------------------------------


@dataclass
class RawType:
    """A type declaration as found in the schema document."""

    name: str = ""
    type: str | None = None  # Parent type name or type expression
    properties: dict[str, Any] = field(default_factory=dict)
    enum: list[Any] | None = None
    description: str = ""
    items: str | None = None  # For `type: array` declarations


@dataclass
class RawMethod:
    """A resource method with its payload type references."""

    verb: str = ""
    display_name: str = ""
    request_body_type: str = ""
    response_body_types: list[str] = field(default_factory=list)

    def payload_types(self) -> list[str]:
        """All payload type references of this method, request first."""
        payloads = [self.request_body_type] if self.request_body_type else []
        payloads.extend(t for t in self.response_body_types if t)
        return payloads


@dataclass
class RawResource:
    """A node of the resource tree."""

    uri: str = ""
    methods: list[RawMethod] = field(default_factory=list)
    children: list[RawResource] = field(default_factory=list)

    def walk(self):
        """Yield this resource and all of its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class ApiSchema:
    """Root of the parsed schema document."""

    title: str = ""
    types: dict[str, RawType] = field(default_factory=dict)
    resources: list[RawResource] = field(default_factory=list)

    # Raw document for reference
    raw_document: dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Type expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TypeExpr:
    """Base class for parsed type expressions."""

    raw: str = ""


@dataclass(frozen=True)
class NamedType(TypeExpr):
    """A bare name: scalar keyword or reference to a declared type."""

    name: str = ""
    qualifier: str = ""  # Namespace prefix of a dotted reference


@dataclass(frozen=True)
class ArrayType(TypeExpr):
    """An array suffix expression (``T[]``, ``T[][]``)."""

    element: TypeExpr | None = None
    dimensions: int = 1


@dataclass(frozen=True)
class MapType(TypeExpr):
    """A map suffix expression (``T{}``)."""

    value: TypeExpr | None = None


@dataclass(frozen=True)
class UnionType(TypeExpr):
    """A union expression (``A | B``)."""

    members: tuple[TypeExpr, ...] = ()

    def member_names(self) -> list[str]:
        return [m.raw for m in self.members]


def referenced_names(expr: TypeExpr | None) -> list[str]:
    """Collect every bare type name an expression refers to."""
    if expr is None:
        return []
    if isinstance(expr, NamedType):
        return [expr.name] if expr.name else []
    if isinstance(expr, ArrayType):
        return referenced_names(expr.element)
    if isinstance(expr, MapType):
        return referenced_names(expr.value)
    if isinstance(expr, UnionType):
        names = []
        for member in expr.members:
            names.extend(referenced_names(member))
        return names
    raise TypeError(f"Unknown type expression: {type(expr).__name__}")


def union_expressions(expr: TypeExpr | None) -> list[UnionType]:
    """Collect all union expressions nested in an expression."""
    if expr is None or isinstance(expr, NamedType):
        return []
    if isinstance(expr, ArrayType):
        return union_expressions(expr.element)
    if isinstance(expr, MapType):
        return union_expressions(expr.value)
    if isinstance(expr, UnionType):
        unions = [expr]
        for member in expr.members:
            unions.extend(union_expressions(member))
        return unions
    raise TypeError(f"Unknown type expression: {type(expr).__name__}")


# ---------------------------------------------------------------------------
# Type graph
# ---------------------------------------------------------------------------


class TypeKind(Enum):
    """Kind of a declared type."""

    SCALAR = "scalar"  # string, integer, ...
    OBJECT = "object"  # Object, inherited or not
    ARRAY = "array"  # Cat[]
    UNION = "union"  # Cat | Dog
    ENUM = "enum"  # Declares enum literals
    MAP = "map"  # string{}
    REFERENCE = "reference"  # Names something that is not declared here


@dataclass(frozen=True)
class PropertySpec:
    """A normalized property declaration."""

    name: str = ""
    declared_type: TypeExpr = field(default_factory=TypeExpr)
    required: bool = True
    children: tuple[PropertySpec, ...] = ()
    enum_values: tuple[Any, ...] | None = None
    description: str = ""

    @property
    def is_enum(self) -> bool:
        return self.enum_values is not None

    @property
    def is_union(self) -> bool:
        return isinstance(self.declared_type, UnionType)

    def walk(self):
        """Yield this property and all inline child properties."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class TypeNode:
    """A normalized declared type."""

    name: str = ""
    kind: TypeKind = TypeKind.OBJECT
    parent_name: str | None = None
    declared_type: TypeExpr = field(default_factory=TypeExpr)
    properties: dict[str, PropertySpec] = field(default_factory=dict)
    enum_values: tuple[Any, ...] | None = None
    description: str = ""

    @property
    def is_enum(self) -> bool:
        return self.enum_values is not None


@dataclass(frozen=True)
class TypeGraph:
    """All declared types plus the resource tree, built once per run."""

    title: str = ""
    nodes: dict[str, TypeNode] = field(default_factory=dict)
    resources: tuple[RawResource, ...] = ()

    def __contains__(self, name: object) -> bool:
        return name in self.nodes

    def get(self, name: str) -> TypeNode | None:
        return self.nodes.get(name)

    def names(self) -> list[str]:
        """Type names in declaration order."""
        return list(self.nodes)

    def iter_properties(self):
        """Yield every property of every type, inline children included."""
        for node in self.nodes.values():
            for prop in node.properties.values():
                yield from prop.walk()

    def iter_methods(self):
        """Yield every method anywhere in the resource tree."""
        for resource in self.resources:
            for node in resource.walk():
                yield from node.methods
