#!/usr/bin/env python3
from core.type_resolver import (
    TypeResolver, primitive_target_name, qualified_name, rendered_type
)
from core.uml_model import Reference, UmlClass, UmlModel, UmlOperation, UmlPackage, UmlProperty
from types_profiles.registry import TypeProfileRegistry
from uml_types import UNBOUNDED


def test_qualified_name_outermost_first(university_model):
    test_cls = university_model.find_type("de.university.hof.Test")
    assert qualified_name(test_cls) == "de.university.hof"
    assert qualified_name(test_cls, "/") == "de/university/hof"
    assert TypeResolver().package_path(test_cls) == "de/university/hof"


def test_qualified_name_of_package_includes_itself(university_model):
    hof = university_model.packages[0].packages[0].packages[0]
    assert qualified_name(hof) == "de.university.hof"


def test_primitive_table():
    assert primitive_target_name("Decimal") == "Double"
    assert primitive_target_name("Integer") == "Integer"
    assert primitive_target_name("Boolean") == "Boolean"
    assert primitive_target_name("Char") == "Char"


def test_registry_overrides_table():
    resolver = TypeResolver(TypeProfileRegistry(aliases={"Decimal": "BigDecimal"}))
    assert resolver.primitive_target_name("Decimal") == "BigDecimal"
    assert resolver.primitive_target_name("String") == "String"


def test_rendered_type_wraps_anything_but_exactly_one(university_model):
    test_cls = university_model.find_type("de.university.hof.Test")
    by_name = {p.name: p for p in test_cls.properties}
    assert rendered_type(by_name["a"]) == "Integer"
    assert rendered_type(by_name["names"]) == "List<String>"

    holder = UmlClass(name="Holder", properties=[
        UmlProperty(name="opt", type=Reference("Holder"), lower=0, upper=1),
        UmlProperty(name="pair", type=Reference("Holder"), lower=2, upper=2),
        UmlProperty(name="gone", type=Reference("Missing"), upper=UNBOUNDED),
    ])
    UmlModel(packages=[UmlPackage(name="p", types=[holder])])
    rendered = {p.name: rendered_type(p) for p in holder.properties}
    assert rendered == {"opt": "Holder", "pair": "List<Holder>", "gone": ""}


def test_return_type():
    op_void = UmlOperation(name="run")
    op_many = UmlOperation(name="all", type=Reference("Item"), upper=UNBOUNDED)
    item = UmlClass(name="Item", operations=[op_void, op_many])
    UmlModel(packages=[UmlPackage(name="p", types=[item])])
    resolver = TypeResolver()
    assert resolver.return_type(op_void) == "void"
    assert resolver.return_type(op_many) == "List<Item>"
