from unittest import TestCase

from raml_to_code.pipeline.analyzer import CommonAncestorResolver, HierarchyResolver
from raml_to_code.pipeline.schema_ast import SchemaParser, TypeGraphBuilder


class TestCommonAncestor(TestCase):
    """Test resolution of union members to their nearest shared supertype"""

    def setUp(self):
        graph = TypeGraphBuilder().build(
            SchemaParser().parse(
                {
                    "types": {
                        "A": {},
                        "B": {"type": "A"},
                        "C": {"type": "A"},
                        "D": {"type": "B"},
                        "E": {"type": "B"},
                        "X": {},
                    }
                }
            )
        )
        self.resolver = CommonAncestorResolver(HierarchyResolver(graph))

    def test_siblings(self):
        self.assertEqual(self.resolver.resolve(["B", "C"]), "A")

    def test_most_specific_ancestor(self):
        self.assertEqual(self.resolver.resolve(["D", "E"]), "B")

    def test_different_depths(self):
        self.assertEqual(self.resolver.resolve(["D", "C"]), "A")

    def test_member_is_not_its_own_ancestor(self):
        # B is D's parent but B itself only has A above it
        self.assertEqual(self.resolver.resolve(["D", "B"]), "A")

    def test_order_does_not_matter(self):
        self.assertEqual(self.resolver.resolve(["C", "D"]), self.resolver.resolve(["D", "C"]))

    def test_unrelated_members(self):
        self.assertEqual(self.resolver.resolve(["B", "X"]), "Object")

    def test_undeclared_members(self):
        self.assertEqual(self.resolver.resolve(["string", "integer"]), "Object")

    def test_configurable_universal_base(self):
        resolver = CommonAncestorResolver(self.resolver.hierarchy, universal_base_type="Any")
        self.assertEqual(resolver.resolve(["A", "X"]), "Any")
        self.assertEqual(resolver.resolve([]), "Any")
