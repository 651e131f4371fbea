#!/usr/bin/env python3
"""
Core model, resolution, validation and association synthesis.
"""

# Re-export commonly used core components
from .uml_model import (
    Reference, UmlModel, UmlElement, UmlPackage, UmlType, UmlClass, UmlInterface,
    UmlDataType, UmlPrimitiveType, UmlEnumeration, UmlAssociation,
    UmlProperty, UmlOperation, UmlParameter
)
from .errors import ClassGenError, ModelLoadError, ValidationFailedError

__all__ = [
    'Reference', 'UmlModel', 'UmlElement', 'UmlPackage', 'UmlType', 'UmlClass',
    'UmlInterface', 'UmlDataType', 'UmlPrimitiveType', 'UmlEnumeration',
    'UmlAssociation', 'UmlProperty', 'UmlOperation', 'UmlParameter',
    'ClassGenError', 'ModelLoadError', 'ValidationFailedError',
]
