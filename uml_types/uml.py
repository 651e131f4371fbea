#!/usr/bin/env python3
"""
UML-specific types and enums for the class-diagram generator.
"""

from typing import Literal, NewType
from enum import Enum

# ---------- Type aliases for UML elements ----------
ElementName = NewType('ElementName', str)
TypeName = NewType('TypeName', str)
Severity = Literal["error", "warning"]

# Upper bound value meaning "*"
UNBOUNDED = -1

# ---------- Enums for UML elements ----------
class ElementKind(Enum):
    CLASS = "class"
    INTERFACE = "interface"
    DATATYPE = "datatype"
    PRIMITIVE = "primitive"
    ENUM = "enumeration"
    ASSOCIATION = "association"

class Visibility(Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    PACKAGE = "package"

class AggregationType(Enum):
    NONE = "none"
    SHARED = "shared"
    COMPOSITE = "composite"
