#!/usr/bin/env python3
"""
Unit tests for structural validation:
- naming conventions are warnings
- every duplicate occurrence is flagged
- each member of an inheritance cycle gets one diagnostic
"""

from core.uml_model import (
    Reference, UmlAssociation, UmlClass, UmlEnumeration, UmlInterface, UmlModel,
    UmlOperation, UmlPackage, UmlProperty
)
from core.validator import Diagnostic, ModelValidator, validate


def _model(*types, packages=None):
    return UmlModel(packages=[UmlPackage(name="p", types=list(types), packages=packages or [])])


def _messages(diagnostics):
    return [d.message for d in diagnostics]


def test_clean_model_has_no_diagnostics(university_model):
    assert validate(university_model) == []


def test_naming_conventions_are_warnings():
    cls = UmlClass(
        name="lower",
        properties=[UmlProperty(name="Upper")],
        operations=[UmlOperation(name="DoIt")],
    )
    enum = UmlEnumeration(name="Color", literals=["RED", "Green"])
    diagnostics = validate(_model(cls, enum))
    assert all(d.severity == "warning" for d in diagnostics)
    assert sorted(_messages(diagnostics)) == sorted([
        "Type name should start with a capital.",
        "Property name should start with lowercase.",
        "Operation name should start with lowercase.",
        "Enumeration literal should consist of capitals.",
    ])
    literal = next(d for d in diagnostics if d.field == "literals")
    assert literal.target is enum
    assert literal.index == 1


def test_association_names_are_not_type_names():
    a = UmlClass(name="A")
    assoc = UmlAssociation(name="contains", ends=[
        UmlProperty(name="a", type=Reference("A")),
        UmlProperty(name="b", type=Reference("A")),
    ])
    assert validate(_model(a, assoc)) == []


def test_duplicate_types_flag_both_occurrences():
    first, second = UmlClass(name="A"), UmlClass(name="A")
    diagnostics = validate(_model(first, second))
    assert _messages(diagnostics) == ["Duplicate type name 'A'.", "Duplicate type name 'A'."]
    assert [d.target for d in diagnostics] == [first, second]
    assert all(d.is_error for d in diagnostics)


def test_duplicate_members_flag_each_occurrence():
    cls = UmlClass(
        name="A",
        properties=[UmlProperty(name="x"), UmlProperty(name="x"), UmlProperty(name="y")],
        operations=[UmlOperation(name="run"), UmlOperation(name="run")],
    )
    messages = _messages(validate(_model(cls)))
    assert messages.count("Duplicate property name 'x'.") == 2
    assert messages.count("Duplicate operation name 'run'.") == 2
    assert len(messages) == 4


def test_duplicate_packages_and_literals():
    model = UmlModel(packages=[
        UmlPackage(name="p", packages=[UmlPackage(name="q"), UmlPackage(name="q")]),
        UmlPackage(name="p"),
    ])
    messages = _messages(validate(model))
    assert messages.count("Duplicate package name 'p'.") == 2
    assert messages.count("Duplicate package name 'q'.") == 2

    enum = UmlEnumeration(name="E", literals=["A", "B", "A", "A"])
    diagnostics = validate(_model(enum))
    assert [d.index for d in diagnostics] == [0, 2, 3]
    assert set(_messages(diagnostics)) == {"Duplicate enumeration literal name 'A'."}


def test_two_class_cycle_reports_both_ends():
    a = UmlClass(name="A", super_classes=[Reference("B")])
    b = UmlClass(name="B", super_classes=[Reference("A")])
    diagnostics = validate(_model(a, b))
    assert _messages(diagnostics) == ["Cycle in class inheritance"] * 2
    assert [d.target for d in diagnostics] == [a, b]
    assert all(d.field == "super_classes" and d.index == 0 for d in diagnostics)


def test_self_inheritance_is_a_cycle():
    a = UmlClass(name="A", super_classes=[Reference("A")])
    diagnostics = validate(_model(a))
    assert len(diagnostics) == 1
    assert diagnostics[0].target is a


def test_three_interface_cycle_reports_three():
    i1 = UmlInterface(name="I1", super_interfaces=[Reference("I2")])
    i2 = UmlInterface(name="I2", super_interfaces=[Reference("I3")])
    i3 = UmlInterface(name="I3", super_interfaces=[Reference("I1")])
    leaf = UmlInterface(name="Leaf", super_interfaces=[Reference("I1")])
    diagnostics = validate(_model(i1, i2, i3, leaf))
    assert _messages(diagnostics) == ["Cycle in interface inheritance"] * 3
    assert leaf not in [d.target for d in diagnostics]


def test_diamond_is_not_a_cycle():
    top = UmlInterface(name="Top")
    left = UmlInterface(name="Left", super_interfaces=[Reference("Top")])
    right = UmlInterface(name="Right", super_interfaces=[Reference("Top")])
    bottom = UmlInterface(name="Bottom", super_interfaces=[Reference("Left"), Reference("Right")])
    assert validate(_model(top, left, right, bottom)) == []


def test_cycle_anchor_points_at_reference_on_cycle():
    base = UmlClass(name="Base")
    a = UmlClass(name="A", super_classes=[Reference("Base"), Reference("B")])
    b = UmlClass(name="B", super_classes=[Reference("A")])
    diagnostics = validate(_model(base, a, b))
    anchored = {d.target.name: d.index for d in diagnostics}
    assert anchored == {"A": 1, "B": 0}


def test_unresolved_super_is_a_warning_not_a_cycle():
    a = UmlClass(name="A", super_classes=[Reference("Missing")])
    diagnostics = validate(_model(a))
    assert _messages(diagnostics) == ["Could not resolve reference to 'Missing'."]
    assert diagnostics[0].severity == "warning"
    assert ModelValidator(report_unresolved_references=False).validate(_model(
        UmlClass(name="A", super_classes=[Reference("Missing")])
    )) == []


def test_association_arity_and_abstract_operations():
    a = UmlClass(name="A", operations=[UmlOperation(name="run", is_abstract=True)])
    assoc = UmlAssociation(name="broken", ends=[UmlProperty(name="a", type=Reference("A"))])
    messages = _messages(validate(_model(a, assoc)))
    assert "Association must have exactly two ends." in messages
    assert "Class with abstract operations must be declared abstract." in messages

    ok = UmlClass(name="A", is_abstract=True, operations=[UmlOperation(name="run", is_abstract=True)])
    assert validate(_model(ok)) == []


def test_association_end_clashing_with_property():
    a = UmlClass(name="A", properties=[UmlProperty(name="b")])
    b = UmlClass(name="B")
    assoc = UmlAssociation(name="rel", ends=[
        UmlProperty(name="a", type=Reference("A")),
        UmlProperty(name="b", type=Reference("B")),
    ])
    diagnostics = validate(_model(a, b, assoc))
    assert _messages(diagnostics) == ["Association end 'b' clashes with property 'b'."]


def test_diagnostic_str():
    d = Diagnostic("error", "Boom.", UmlClass(name="A"), "super_classes", 2)
    assert str(d) == "error: Boom. (A.super_classes[2])"
