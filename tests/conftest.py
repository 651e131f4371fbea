import os
import sys

import pytest

# Ensure project root is first on sys.path so the flat top-level packages are importable
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from core.uml_model import (  # noqa: E402
    Reference, UmlAssociation, UmlClass, UmlDataType, UmlEnumeration, UmlInterface,
    UmlModel, UmlOperation, UmlPackage, UmlParameter, UmlPrimitiveType, UmlProperty
)
from uml_types import AggregationType, UNBOUNDED, Visibility  # noqa: E402


def _mk_prop(name, type_name, lower=1, upper=1, **kw):
    return UmlProperty(name=name, type=Reference(type_name), lower=lower, upper=upper, **kw)


@pytest.fixture
def university_model() -> UmlModel:
    """``de.university.hof`` with a class using primitives, a base class and an interface."""
    hof = UmlPackage(
        name="hof",
        types=[
            UmlPrimitiveType(name="Integer"),
            UmlPrimitiveType(name="String"),
            UmlClass(name="Base"),
            UmlInterface(name="ITest"),
            UmlClass(
                name="Test",
                super_classes=[Reference("Base")],
                super_interfaces=[Reference("ITest")],
                properties=[
                    _mk_prop("a", "Integer", visibility=Visibility.PUBLIC),
                    _mk_prop("b", "String", visibility=Visibility.PRIVATE),
                    _mk_prop("names", "String", lower=0, upper=UNBOUNDED),
                ],
                operations=[
                    UmlOperation(
                        name="doSmth",
                        type=Reference("Integer"),
                        visibility=Visibility.PROTECTED,
                        parameters=[UmlParameter(name="test", type=Reference("String"))],
                        description="Does something.",
                        content="return 1;",
                    ),
                ],
            ),
        ],
    )
    university = UmlPackage(name="university", packages=[hof])
    return UmlModel(packages=[UmlPackage(name="de", packages=[university])])


@pytest.fixture
def contains_model() -> UmlModel:
    """Association ``contains`` between ``A [0..1]`` and composite ``B [0..*]``."""
    pkg = UmlPackage(
        name="p",
        types=[
            UmlClass(name="A"),
            UmlClass(name="B"),
            UmlAssociation(
                name="contains",
                ends=[
                    _mk_prop("a", "A", lower=0, upper=1),
                    _mk_prop("b", "B", lower=0, upper=UNBOUNDED, aggregation=AggregationType.COMPOSITE),
                ],
            ),
        ],
    )
    return UmlModel(packages=[pkg])
