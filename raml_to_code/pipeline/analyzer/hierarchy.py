"""
Hierarchy resolver.

Computes ancestor chains and flattens inherited properties. Bound to one
TypeGraph; chains are cached since every type is resolved against the
chains of its ancestors and of union members.
"""

from __future__ import annotations

from ...utils import title_case
from ..errors import CycleError
from ..schema_ast.nodes import PropertySpec, TypeGraph


class HierarchyResolver:
    """Walks parent links of a TypeGraph."""

    def __init__(self, graph: TypeGraph, legacy_required_overrides: bool = True):
        """
        Initialize the resolver.

        Args:
            graph: The type graph
            legacy_required_overrides: Use the positional suffix of sorted
                name lists for required child overrides
        """
        self.graph = graph
        self.legacy_required_overrides = legacy_required_overrides
        self._chain_cache: dict[str, list[str]] = {}
        self._children_cache: dict[str, list[str]] | None = None

    def ancestor_chain(self, name: str) -> list[str]:
        """
        Get the inheritance chain of a type, self first, root last.

        Raises:
            CycleError: if a name repeats during the walk
        """
        if name in self._chain_cache:
            return list(self._chain_cache[name])

        chain = []
        seen = set()
        current = name
        while current is not None and current in self.graph:
            if current in seen:
                raise CycleError(chain + [current])
            seen.add(current)
            chain.append(current)
            current = self.graph.nodes[current].parent_name

        self._chain_cache[name] = chain
        return list(chain)

    def ancestors(self, name: str) -> list[str]:
        """Ancestors of a type, nearest first, self excluded."""
        return self.ancestor_chain(name)[1:]

    def parent_of(self, name: str) -> str | None:
        node = self.graph.get(name)
        return node.parent_name if node else None

    def children_of(self, name: str) -> list[str]:
        """Direct children of a type, sorted by name."""
        if self._children_cache is None:
            children: dict[str, list[str]] = {}
            for node in self.graph.nodes.values():
                if node.parent_name is not None:
                    children.setdefault(node.parent_name, []).append(node.name)
            self._children_cache = {k: sorted(v) for k, v in children.items()}
        return list(self._children_cache.get(name, []))

    def flatten_properties(self, chain: list[str]) -> dict[str, PropertySpec]:
        """
        Merge the properties of a chain, root to self.

        A child's property shadows the parent's property of the same name
        and keeps the position the ancestor gave it.

        Args:
            chain: Inheritance chain, self first

        Returns:
            Ordered mapping of property name to effective PropertySpec
        """
        properties: dict[str, PropertySpec] = {}
        for type_name in reversed(chain):
            for prop_name, prop in self.graph.nodes[type_name].properties.items():
                properties[prop_name] = prop
        return properties

    def effective_properties(self, name: str) -> dict[str, PropertySpec]:
        return self.flatten_properties(self.ancestor_chain(name))

    def is_member(self, name: str, prop: PropertySpec) -> bool:
        """
        Whether a property is declared on the type itself.

        False when the parent already has a same-named property of the
        identical declared type. Enum properties are always members since
        their enum identifiers are scoped per owning type.
        """
        parent_name = self.parent_of(name)
        if parent_name is None or prop.is_enum:
            return True

        parent_prop = self.effective_properties(parent_name).get(prop.name)
        if parent_prop is None:
            return True
        return parent_prop.declared_type.raw != prop.declared_type.raw

    def required_child_overrides(self, prop: PropertySpec, referenced_type: str | None) -> list[str]:
        """
        Names that became required only for this use of a type.

        Compares the required inline child properties of ``prop`` against
        the required properties declared on ``referenced_type`` itself.
        """
        if referenced_type is None or referenced_type not in self.graph:
            return []

        main_required = [p.name for p in self.graph.nodes[referenced_type].properties.values() if p.required]
        child_required = [p.name for p in prop.children if p.required]

        if len(child_required) <= len(main_required):
            return []

        if self.legacy_required_overrides:
            # Positional suffix; only the true difference when new names sort last
            child_required.sort(key=title_case)
            main_required.sort(key=title_case)
            return child_required[len(main_required) :]

        return sorted(set(child_required) - set(main_required), key=title_case)
