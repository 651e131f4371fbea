#!/usr/bin/env python3
"""
Unit tests for PlantUML diagram generation.
"""

from app.config import GeneratorConfig
from core.uml_model import (
    Reference, UmlAssociation, UmlClass, UmlDataType, UmlEnumeration, UmlInterface,
    UmlModel, UmlOperation, UmlPackage, UmlProperty
)
from gen.plantuml.generator import PlantUmlGenerator
from gen.plantuml.writer import pu_cardinality, pu_edge_glyph, pu_multiplicity
from uml_types import AggregationType, UNBOUNDED, Visibility


def test_cardinality_suffix():
    assert pu_cardinality(0, 1) == "[0..1]"
    assert pu_cardinality(0, UNBOUNDED) == "[0..*]"
    assert pu_cardinality(1, UNBOUNDED) == "[1..*]"
    assert pu_cardinality(1, 1) == ""
    assert pu_cardinality(2, 5) == ""


def test_multiplicity_label_and_glyphs():
    assert pu_multiplicity(1, 1) == "1"
    assert pu_multiplicity(0, UNBOUNDED) == "0..*"
    assert pu_multiplicity(2, 4) == "2..4"
    assert pu_edge_glyph(AggregationType.NONE, AggregationType.NONE) == "--"
    assert pu_edge_glyph(AggregationType.SHARED, AggregationType.NONE) == "o--"
    assert pu_edge_glyph(AggregationType.COMPOSITE, AggregationType.SHARED) == "*--o"


def test_contains_edge(contains_model):
    (doc,) = PlantUmlGenerator(contains_model).generate()
    lines = doc.text.splitlines()
    assert lines[0] == "@startuml"
    assert lines[-1] == "@enduml"
    assert 'A "0..1" *-- "0..*" B : contains >' in lines
    assert doc.name == "diagram_p"
    assert doc.file_name == "diagram_p.puml"


def test_one_document_per_package_with_types(university_model):
    docs = PlantUmlGenerator(university_model, GeneratorConfig(diagram_base_name="model")).generate()
    assert [d.name for d in docs] == ["model_de.university.hof"]
    assert docs[0].package == "de.university.hof"


def test_package_document(university_model):
    (doc,) = PlantUmlGenerator(university_model).generate()
    assert doc.text == "\n".join([
        "@startuml",
        "class Integer <<primitive>>",
        "class String <<primitive>>",
        "class Base",
        "class Test {",
        "    + a : Integer",
        "    - b : String",
        "    ~ names : String [0..*]",
        "    # doSmth(test : String) : Integer",
        "}",
        "interface ITest",
        "",
        "Base <|-- Test",
        "ITest <|.. Test",
        "",
        "hide <<primitive>> members",
        "hide <<primitive>> circle",
        "@enduml",
    ]) + "\n"


def test_boxes_and_modifiers():
    shape = UmlClass(name="Shape", is_abstract=True, operations=[
        UmlOperation(name="area", is_abstract=True, visibility=Visibility.PUBLIC),
        UmlOperation(name="unit", is_static=True, visibility=Visibility.PUBLIC),
    ])
    money = UmlDataType(name="Money", properties=[UmlProperty(name="amount", visibility=Visibility.PRIVATE)])
    color = UmlEnumeration(name="Color", literals=["RED", "GREEN"])
    base = UmlInterface(name="Base")
    named = UmlInterface(name="Named", super_interfaces=[Reference("Base")])
    model = UmlModel(packages=[UmlPackage(name="p", types=[shape, money, color, base, named])])
    lines = PlantUmlGenerator(model).generate()[0].text.splitlines()

    assert lines[1:4] == ["class Money <<datatype>> {", "    - amount", "}"]
    assert "abstract class Shape {" in lines
    assert "    + {abstract} area()" in lines
    assert "    + {static} unit()" in lines
    assert lines.index("enum Color {") > lines.index("abstract class Shape {")
    assert "    RED" in lines
    assert "Base <|-- Named" in lines
    assert "hide <<datatype>> circle" in lines
    assert "hide <<primitive>> circle" not in lines


def test_shared_first_end_is_mirrored():
    assoc = UmlAssociation(name="uses", ends=[
        UmlProperty(name="a", type=Reference("A"), aggregation=AggregationType.SHARED),
        UmlProperty(name="bs", type=Reference("B"), lower=1, upper=UNBOUNDED),
    ])
    dangling = UmlAssociation(name="lost", ends=[
        UmlProperty(name="a", type=Reference("A")),
        UmlProperty(name="g", type=Reference("Ghost")),
    ])
    model = UmlModel(packages=[UmlPackage(name="p", types=[UmlClass(name="A"), UmlClass(name="B"), assoc, dangling])])
    text = PlantUmlGenerator(model).generate()[0].text
    assert 'A "1" --o "1..*" B : uses >' in text
    assert "lost" not in text
