"""
Common ancestor resolver for union member types.
"""

from __future__ import annotations

import logging

from .hierarchy import HierarchyResolver

logger = logging.getLogger(__name__)


class CommonAncestorResolver:
    """Collapses union members to their nearest shared supertype."""

    def __init__(self, hierarchy: HierarchyResolver, universal_base_type: str = "Object"):
        self.hierarchy = hierarchy
        self.universal_base_type = universal_base_type

    def resolve(self, members: list[str]) -> str:
        """
        Find the nearest ancestor shared by all members.

        Each member's chain excludes the member itself, so a member is never
        its own common ancestor. Members that are not declared types have an
        empty chain.

        Args:
            members: Union member type names

        Returns:
            The most specific shared ancestor, or the universal base type
        """
        unique_members = list(dict.fromkeys(members))
        if not unique_members:
            return self.universal_base_type

        chains = {}
        for member in unique_members:
            chains[member] = self.hierarchy.ancestors(member) if member in self.hierarchy.graph else []

        # Candidates present in every chain, with the deepest position among members
        first, *rest = unique_members
        viable = {}
        for candidate in sorted(chains[first]):
            if all(candidate in chains[m] for m in rest):
                viable[candidate] = max(chains[m].index(candidate) for m in unique_members)

        if not viable:
            logger.debug("No common ancestor for %s, using %s", unique_members, self.universal_base_type)
            return self.universal_base_type

        return min(sorted(viable), key=lambda name: viable[name])
