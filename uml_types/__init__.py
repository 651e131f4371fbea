#!/usr/bin/env python3
"""
Types module for the class-diagram generator.
Centralized type definitions organized by domain.
"""

from .uml import (
    ElementKind, Visibility, AggregationType,
    ElementName, TypeName, Severity,
    UNBOUNDED
)

__all__ = [
    'ElementKind', 'Visibility', 'AggregationType',
    'ElementName', 'TypeName', 'Severity',
    'UNBOUNDED',
]
