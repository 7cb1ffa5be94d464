"""
Polymorphism analyzer.

Decides which types are abstract and which need a discriminant-based
deserializer. Both questions need the whole schema: every property of
every type and every resource method payload.
"""

from __future__ import annotations

from ..schema_ast.nodes import referenced_names, union_expressions
from ..schema_ast.type_graph import parse_type_expression
from .field_mapper import union_member_name
from .hierarchy import HierarchyResolver

# Field a deserializer inspects to pick the concrete subtype
DISCRIMINANT_FIELD = "name"

DESERIALIZER_SUFFIX = "Deserializer"


class PolymorphismAnalyzer:
    """Abstractness and deserializer eligibility over one TypeGraph."""

    def __init__(self, hierarchy: HierarchyResolver, annotations: str = ""):
        """
        Initialize the analyzer.

        Args:
            hierarchy: Hierarchy resolver bound to the graph
            annotations: Serialization annotation style ("" for none)
        """
        self.hierarchy = hierarchy
        self.graph = hierarchy.graph
        self.annotations = annotations
        self._used_types: set[str] | None = None
        self._union_member_sets: list[set[str]] | None = None

    def used_types(self) -> set[str]:
        """Every type name used by a property or a resource method payload."""
        if self._used_types is None:
            used = set()
            for prop in self.graph.iter_properties():
                used.update(referenced_names(prop.declared_type))
            for method in self.graph.iter_methods():
                for payload in method.payload_types():
                    used.update(referenced_names(parse_type_expression(payload)))
            self._used_types = used
        return self._used_types

    def union_member_sets(self) -> list[set[str]]:
        """Member name sets of every union property in the schema."""
        if self._union_member_sets is None:
            member_sets = []
            for prop in self.graph.iter_properties():
                for union in union_expressions(prop.declared_type):
                    member_sets.append({union_member_name(m) for m in union.members})
            self._union_member_sets = member_sets
        return self._union_member_sets

    def is_used(self, name: str) -> bool:
        return name in self.used_types()

    def is_abstract(self, name: str) -> bool:
        """
        A type is abstract when it has children, is never the type of a
        property or payload, and has no parent itself.
        """
        return bool(self.hierarchy.children_of(name)) and not self.is_used(name) and self.hierarchy.parent_of(name) is None

    def needs_custom_deserializer(self, name: str) -> bool:
        """
        Whether references to this type need a discriminant dispatcher.

        Requires an annotation style, an abstract type, and a union
        property somewhere whose members include all direct children.
        """
        if not self.annotations:
            return False
        if not self.is_abstract(name):
            return False

        children = set(self.hierarchy.children_of(name))
        return any(children <= members for members in self.union_member_sets())

    def deserializer_target(self, name: str) -> str:
        """
        Name of the construct a reference to this type deserializes through.

        Abstract dispatch parents get ``<Name>Deserializer``; their concrete
        children deserialize as themselves.
        """
        if self.needs_custom_deserializer(name):
            return deserializer_name(name)

        parent_name = self.hierarchy.parent_of(name)
        if parent_name is not None and self.needs_custom_deserializer(parent_name):
            return name

        return ""


def deserializer_name(type_name: str) -> str:
    return type_name + DESERIALIZER_SUFFIX
