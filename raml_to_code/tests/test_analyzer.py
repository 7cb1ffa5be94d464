from pathlib import Path
from unittest import TestCase

from raml_to_code.pipeline import (
    CycleError,
    PipelineResolver,
    ResolverConfig,
    TypeResolver,
    get_backend,
    load_schema_document,
)
from raml_to_code.pipeline.analyzer import EnumRef, ListOf, ObjectRef, Primitive, UnionRef, WarningKind
from raml_to_code.pipeline.schema_ast import SchemaParser, TypeGraphBuilder, TypeKind

TEST_DATA = Path(__file__).parent / "test_data"


def resolve(document, config=None, language="java", annotations=""):
    return PipelineResolver(document, config, language, annotations).resolve()


class TestPetStore(TestCase):
    """Test resolution of a complete RAML document"""

    @classmethod
    def setUpClass(cls):
        document = load_schema_document(TEST_DATA / "pet_store.raml")
        cls.model = resolve(document, annotations="jackson")
        cls.python_model = resolve(document, language="python")

    def test_classes_in_declaration_order(self):
        names = [c.name for c in self.model.classes]
        self.assertEqual(names, ["Animal", "Cat", "Dog", "Owner", "Cats", "Status"])
        self.assertEqual(self.model.title, "Pet Store")
        self.assertEqual(self.model.backend, "java")

    def test_hierarchy(self):
        cat = self.model.get_class("Cat")
        self.assertEqual(cat.parent_name, "Animal")
        self.assertEqual(cat.ancestors, ("Animal",))
        self.assertTrue(cat.has_parent)

        animal = self.model.get_class("Animal")
        self.assertEqual(animal.children, ("Cat", "Dog"))
        self.assertTrue(animal.has_children)
        self.assertTrue(animal.is_abstract)

    def test_ancestor_chain_from_parent_links(self):
        self.assertEqual(self.model.ancestor_chain("Cat"), ["Cat", "Animal"])
        self.assertEqual(self.model.ancestor_chain("Owner"), ["Owner"])

    def test_flattened_fields(self):
        cat = self.model.get_class("Cat")
        self.assertEqual(list(cat.fields), ["name", "age", "lives"])
        self.assertFalse(cat.fields["name"].is_member)
        self.assertFalse(cat.fields["age"].is_member)
        self.assertFalse(cat.fields["age"].required)
        self.assertEqual([f.name for f in cat.member_fields], ["lives"])

    def test_union_field(self):
        pet = self.model.get_class("Owner").fields["pet"]
        self.assertEqual(pet.target_type, UnionRef("Animal", (ObjectRef("Cat"), ObjectRef("Dog"))))
        self.assertEqual(pet.union_members, ("Cat", "Dog"))

    def test_primitive_fields(self):
        owner = self.model.get_class("Owner")
        self.assertEqual(owner.fields["tags"].target_type, ListOf(Primitive("String")))
        self.assertTrue(owner.fields["tags"].is_list)
        self.assertEqual(owner.fields["id"].target_type, Primitive("UUID"))

        python_owner = self.python_model.get_class("Owner")
        self.assertEqual(python_owner.fields["id"].target_type, ObjectRef("UUID"))

    def test_deserializers(self):
        self.assertEqual(self.model.get_class("Animal").deserializer_target, "AnimalDeserializer")
        self.assertEqual(self.model.get_class("Cat").deserializer_target, "Cat")
        self.assertEqual(self.model.get_class("Owner").deserializer_target, "")

        self.assertEqual(len(self.model.deserializers), 1)
        deserializer = self.model.deserializers[0]
        self.assertEqual(deserializer.name, "AnimalDeserializer")
        self.assertEqual(deserializer.base, "Animal")
        self.assertEqual(deserializer.children, ("Cat", "Dog"))
        self.assertEqual(deserializer.discriminant_field, "name")

    def test_no_deserializers_without_annotations(self):
        self.assertEqual(self.python_model.deserializers, ())
        self.assertEqual(self.python_model.get_class("Animal").deserializer_target, "")
        self.assertTrue(self.python_model.get_class("Animal").is_abstract)

    def test_enums(self):
        self.assertEqual([e.name for e in self.model.enums], ["DogBreed", "Status"])

        breed = self.model.get_class("Dog").fields["breed"]
        self.assertEqual(breed.target_type, EnumRef("DogBreed"))
        self.assertTrue(breed.is_member)
        self.assertEqual([m.name for m in self.model.enums[0].members], ["LABRADOR", "_2_FOR_1", "IN_PROGRESS"])

        status = self.model.get_class("Status")
        self.assertEqual(status.kind, TypeKind.ENUM)
        self.assertEqual(status.enum_def.value_type, "string")
        self.assertEqual([m.name for m in status.enum_def.members], ["ACTIVE", "INACTIVE"])
        self.assertIsNone(status.alias_target)

    def test_alias_target(self):
        cats = self.model.get_class("Cats")
        self.assertEqual(cats.kind, TypeKind.ARRAY)
        self.assertEqual(cats.alias_target, ListOf(ObjectRef("Cat")))
        self.assertIsNone(self.model.get_class("Owner").alias_target)

    def test_description(self):
        animal = self.model.get_class("Animal")
        self.assertEqual(animal.description, ("Base of all animals.", "Never instantiated."))

    def test_required_properties(self):
        self.assertTrue(self.model.get_class("Animal").has_required_properties)
        self.assertFalse(self.model.get_class("Cats").has_required_properties)

    def test_to_dict(self):
        d = self.model.to_dict()
        self.assertEqual(d["title"], "Pet Store")
        self.assertEqual(d["deserializers"][0]["name"], "AnimalDeserializer")

        owner = next(c for c in d["classes"] if c["name"] == "Owner")
        pet = next(f for f in owner["fields"] if f["name"] == "pet")
        self.assertEqual(pet["type"]["kind"], "union")
        self.assertEqual(pet["type"]["common_ancestor"], "Animal")


class TestCycleDetection(TestCase):
    def test_self_parent_produces_no_model(self):
        with self.assertRaises(CycleError):
            resolve({"types": {"Ok": {}, "Loop": {"type": "Loop"}}})

    def test_cycle_outside_emitted_classes(self):
        config = ResolverConfig(ignore_classes=["A", "B"])
        with self.assertRaises(CycleError):
            resolve({"types": {"A": {"type": "B"}, "B": {"type": "A"}, "C": {}}}, config)


class TestWarnings(TestCase):
    """Test that unsupported fields are dropped with a warning"""

    def test_unsupported_fields(self):
        document = {
            "types": {
                "Grid": {"properties": {"cells": "integer[][]", "labels": "string{}", "size": "integer"}},
            }
        }
        with self.assertLogs("raml_to_code.pipeline.analyzer.analyzer", level="WARNING"):
            model = resolve(document)

        grid = model.get_class("Grid")
        self.assertEqual(list(grid.fields), ["size"])
        self.assertEqual(
            [(w.kind, w.type_name, w.field_name) for w in model.warnings],
            [
                (WarningKind.UNSUPPORTED_CONSTRUCT, "Grid", "cells"),
                (WarningKind.UNSUPPORTED_CONSTRUCT, "Grid", "labels"),
            ],
        )

    def test_unsupported_alias(self):
        with self.assertLogs("raml_to_code.pipeline.analyzer.analyzer", level="WARNING"):
            model = resolve({"types": {"Matrix": "integer[][]"}})

        self.assertIsNone(model.get_class("Matrix").alias_target)
        self.assertEqual(model.warnings[0].type_name, "Matrix")
        self.assertEqual(model.warnings[0].field_name, "")


class TestConfiguration(TestCase):
    """Test ResolverConfig options"""

    DOCUMENT = {
        "types": {
            "A": {"properties": {"id": "string", "internal": "string"}},
            "B": {"properties": {"a": "A"}},
            "C": {},
        }
    }

    def test_ignore_classes(self):
        model = resolve(self.DOCUMENT, ResolverConfig(ignore_classes=["B"]))
        self.assertEqual([c.name for c in model.classes], ["A", "C"])

    def test_order_classes(self):
        model = resolve(self.DOCUMENT, ResolverConfig(order_classes=["C", "Missing", "A"]))
        self.assertEqual([c.name for c in model.classes], ["C", "A", "B"])

    def test_global_ignore_fields(self):
        model = resolve(self.DOCUMENT, ResolverConfig(global_ignore_fields=["internal"]))
        self.assertEqual(list(model.get_class("A").fields), ["id"])

    def test_universal_base_type(self):
        document = {"types": {"X": {}, "Y": {}, "H": {"properties": {"v": "X | Y"}}}}
        model = resolve(document, ResolverConfig(universal_base_type="JsonNode"))
        self.assertEqual(model.get_class("H").fields["v"].target_type.common_ancestor, "JsonNode")

    def test_required_child_overrides(self):
        document = {
            "types": {
                "Person": {"properties": {"name": "string"}},
                "Team": {"properties": {"lead": {"type": "Person", "properties": {"name": "string", "alpha": "string"}}}},
            }
        }
        legacy = resolve(document).get_class("Team").fields["lead"]
        corrected = resolve(document, ResolverConfig(legacy_required_overrides=False)).get_class("Team").fields["lead"]

        self.assertEqual(legacy.required_child_overrides, ("name",))
        self.assertEqual(corrected.required_child_overrides, ("alpha",))

    def test_config_is_not_mutated(self):
        config = ResolverConfig()
        resolve(self.DOCUMENT, config, annotations="gson")
        self.assertEqual(config.annotations, "")
        self.assertEqual(config.ignore_classes, [])


class TestTypeResolver(TestCase):
    def test_resolver_is_reusable(self):
        resolver = TypeResolver(get_backend("python"), ResolverConfig(), "python")
        builder = TypeGraphBuilder()

        first = resolver.analyze(builder.build(SchemaParser().parse({"types": {"A": {}}})))
        second = resolver.analyze(builder.build(SchemaParser().parse({"types": {"B": {}}})))

        self.assertEqual([c.name for c in first.classes], ["A"])
        self.assertEqual([c.name for c in second.classes], ["B"])
