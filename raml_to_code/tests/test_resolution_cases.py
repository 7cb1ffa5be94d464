import json
from pathlib import Path
from unittest import TestCase

from raml_to_code.pipeline import PipelineResolver, ResolverConfig


class TestResolutionCases(TestCase):
    """Data-driven resolution tests from test_data/resolution_cases.json"""

    def setUp(self):
        self.test_data_path = Path(__file__).parent / "test_data" / "resolution_cases.json"
        with open(self.test_data_path) as f:
            self.test_cases = json.load(f)

    def _resolve(self, test_case):
        resolver = PipelineResolver(test_case["document"], None, test_case["language"], test_case["annotations"])
        return resolver.resolve()

    def test_cases(self):
        for test_case in self.test_cases:
            with self.subTest(name=test_case["name"]):
                model = self._resolve(test_case)

                for path, expected in test_case["expected_fields"].items():
                    class_name, field_name = path.split(".")
                    resolved_field = model.get_class(class_name).fields[field_name]
                    self.assertEqual(resolved_field.target_type.to_dict(), expected, f"Unexpected type for {path}")

                abstract = sorted(c.name for c in model.classes if c.is_abstract)
                self.assertEqual(abstract, test_case["expected_abstract"])

                self.assertEqual([d.name for d in model.deserializers], test_case["expected_deserializers"])

                for class_name, target in test_case["expected_deserializer_targets"].items():
                    self.assertEqual(model.get_class(class_name).deserializer_target, target, class_name)

                warnings = [[w.kind.value, w.type_name, w.field_name] for w in model.warnings]
                self.assertEqual(warnings, test_case["expected_warnings"])

    def test_ancestor_chains_round_trip(self):
        """Every class's chain can be rebuilt from parent links alone"""
        for test_case in self.test_cases:
            with self.subTest(name=test_case["name"]):
                model = self._resolve(test_case)
                for class_def in model.classes:
                    self.assertEqual(model.ancestor_chain(class_def.name), [class_def.name, *class_def.ancestors])

    def test_ancestor_chain_through_ignored_parent(self):
        document = {"types": {"Base": {}, "Mid": {"type": "Base"}, "Leaf": {"type": "Mid"}}}
        model = PipelineResolver(document, ResolverConfig(ignore_classes=["Mid"]), "java").resolve()

        leaf = model.get_class("Leaf")
        self.assertIsNone(model.get_class("Mid"))
        self.assertEqual(leaf.ancestors, ("Mid", "Base"))
        self.assertEqual(model.ancestor_chain("Leaf"), ["Leaf", "Mid", "Base"])

    def test_ancestor_chain_through_native_type(self):
        # Java never emits UUID but types may still inherit from it
        document = {"types": {"UUID": "string", "OrderId": {"type": "UUID"}}}
        model = PipelineResolver(document, None, "java").resolve()

        self.assertEqual([c.name for c in model.classes], ["OrderId"])
        self.assertEqual(model.ancestor_chain("OrderId"), ["OrderId", "UUID"])
