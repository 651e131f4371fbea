#!/usr/bin/env python3
"""
Unit tests for Java source generation.
"""

from app.config import GeneratorConfig
from core.uml_model import (
    Reference, UmlClass, UmlDataType, UmlEnumeration, UmlInterface, UmlModel,
    UmlOperation, UmlPackage, UmlParameter, UmlPrimitiveType, UmlProperty
)
from gen.java.generator import JavaGenerator
from uml_types import UNBOUNDED, Visibility


def _units(model, config=None):
    return {u.name: u for u in JavaGenerator(model, config).generate()}


def test_units_per_generated_type(university_model):
    units = _units(university_model)
    assert sorted(units) == ["Base", "ITest", "Test"]
    test = units["Test"]
    assert test.package == "de.university.hof"
    assert test.path == "de/university/hof/Test.java"
    assert test.file_name == "Test.java"


def test_class_scenario(university_model):
    text = _units(university_model)["Test"].text
    lines = text.splitlines()
    assert lines[0] == "package de.university.hof;"
    assert "import java.util.List;" in lines
    assert "import java.util.ArrayList;" in lines
    assert "public class Test extends Base implements ITest {" in lines

    assert "    private Integer a;" in lines
    assert "    private String b;" in lines
    assert "    private List<String> names = new ArrayList<>();" in lines

    assert "    public Integer getA() {" in lines
    assert "    public void setA(Integer a) {" in lines
    assert "        this.a = a;" in lines
    assert "    private String getB() {" in lines
    assert "    private void setB(String b) {" in lines
    assert "    public List<String> getNames() {" in lines

    assert "    protected Integer doSmth(String test) {" in lines
    assert "        return 1;" in lines
    assert "     * Does something." in lines
    assert "     * @generated NOT" in lines
    assert lines[-1] == "}"

    # fields, then accessors, then operations
    assert lines.index("    private Integer a;") < lines.index("    public Integer getA() {")
    assert lines.index("    public List<String> getNames() {") < lines.index("    protected Integer doSmth(String test) {")


def test_contains_single_side(contains_model):
    text = _units(contains_model)["B"].text
    expected = "\n".join([
        "    public void setA(A newValue) {",
        "        if (this.a == newValue) {",
        "            return;",
        "        }",
        "        if (this.a != null) {",
        "            A oldValue = this.a;",
        "            this.a = null;",
        "            oldValue.removeFromB(this);",
        "        }",
        "        this.a = newValue;",
        "        if (newValue != null) {",
        "            newValue.addToB(this);",
        "        }",
        "    }",
    ])
    assert expected in text
    assert "    private A a;" in text.splitlines()
    assert "import" not in text


def test_contains_collection_side(contains_model):
    text = _units(contains_model)["A"].text
    assert "import java.util.Collections;" in text
    assert "    private List<B> b = new ArrayList<>();" in text
    assert "        return Collections.unmodifiableList(this.b);" in text
    assert "    public int sizeOfB() {" in text
    expected_add = "\n".join([
        "    public void addToB(B newValue) {",
        "        if (newValue == null || this.b.contains(newValue)) {",
        "            return;",
        "        }",
        "        this.b.add(newValue);",
        "        newValue.setA(this);",
        "    }",
    ])
    expected_remove = "\n".join([
        "    public void removeFromB(B oldValue) {",
        "        if (!this.b.contains(oldValue)) {",
        "            return;",
        "        }",
        "        this.b.remove(oldValue);",
        "        oldValue.setA(null);",
        "    }",
    ])
    assert expected_add in text
    assert expected_remove in text


def test_operations_without_content_and_abstract():
    cls = UmlClass(name="Shape", is_abstract=True, operations=[
        UmlOperation(name="area", type=Reference("Decimal"), visibility=Visibility.PUBLIC, is_abstract=True),
        UmlOperation(name="describe", description="Human readable form."),
        UmlOperation(name="create", is_static=True, visibility=Visibility.PUBLIC, type=Reference("Shape")),
    ])
    model = UmlModel(packages=[UmlPackage(name="geo", types=[UmlPrimitiveType(name="Decimal"), cls])])
    lines = _units(model)["Shape"].text.splitlines()
    assert "public abstract class Shape {" in lines
    assert "    public abstract Double area();" in lines
    assert "    void describe() {" in lines
    assert "        throw new UnsupportedOperationException();" in lines
    assert "     * Human readable form." in lines
    assert "     * @generated" in lines
    assert "    public static Shape create() {" in lines


def test_unresolved_super_is_omitted():
    cls = UmlClass(name="A", super_classes=[Reference("Missing"), Reference("Base")])
    model = UmlModel(packages=[UmlPackage(name="p", types=[UmlClass(name="Base"), cls])])
    assert "public class A extends Base {" in _units(model)["A"].text


def test_other_package_types_are_imported():
    base = UmlClass(name="Base")
    cls = UmlClass(name="Sub", super_classes=[Reference("lib.Base")])
    model = UmlModel(packages=[
        UmlPackage(name="lib", types=[base]),
        UmlPackage(name="app", types=[cls]),
    ])
    text = _units(model)["Sub"].text
    assert "import lib.Base;" in text
    assert "public class Sub extends Base {" in text


def test_interface_datatype_enumeration():
    iface = UmlInterface(
        name="Named",
        super_interfaces=[Reference("Base")],
        properties=[
            UmlProperty(name="label", type=Reference("String")),
            UmlProperty(name="tags", type=Reference("String"), upper=UNBOUNDED),
        ],
        operations=[
            UmlOperation(name="name", type=Reference("String")),
            UmlOperation(name="rename", parameters=[UmlParameter(name="to", type=Reference("String"))]),
        ],
    )
    money = UmlDataType(name="Money", properties=[
        UmlProperty(name="amount", type=Reference("Decimal")),
        UmlProperty(name="currency", type=Reference("String")),
    ])
    color = UmlEnumeration(name="Color", literals=["RED", "GREEN"])
    model = UmlModel(packages=[UmlPackage(name="p", types=[
        UmlPrimitiveType(name="String"), UmlPrimitiveType(name="Decimal"),
        UmlInterface(name="Base"), iface, money, color,
    ])])
    units = _units(model)

    iface_lines = units["Named"].text.splitlines()
    assert "public interface Named extends Base {" in iface_lines
    assert "    String label = null;" in iface_lines
    assert "    List<String> tags = List.of();" in iface_lines
    assert "    String name();" in iface_lines
    assert "    void rename(String to);" in iface_lines

    assert "public record Money(Double amount, String currency) {" in units["Money"].text

    assert units["Color"].text.splitlines()[2:] == ["public enum Color {", "    RED,", "    GREEN", "}"]

    no_enums = _units(model, GeneratorConfig(emit_enumerations=False))
    assert "Color" not in no_enums


def test_generated_kinds(contains_model):
    generator = JavaGenerator(contains_model)
    by_name = {t.name: t for t in contains_model.iter_types()}
    assert generator.generates(by_name["A"])
    assert not generator.generates(by_name["contains"])
    assert generator.generate_type(by_name["contains"]) is None

    color = UmlEnumeration(name="Color", literals=["RED"])
    model = UmlModel(packages=[UmlPackage(name="p", types=[UmlPrimitiveType(name="Integer"), color])])
    assert not JavaGenerator(model).generates(model.find_type("p.Integer"))
    assert JavaGenerator(model).generates(color)
    assert not JavaGenerator(model, GeneratorConfig(emit_enumerations=False)).generates(color)
