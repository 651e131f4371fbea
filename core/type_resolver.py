"""
Qualified names and target-language type names.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from core.namespace import package_chain
from core.uml_model import UmlPrimitiveType, UmlType
from meta import DEFAULT_META, JavaMetaModel
from types_profiles.registry import TypeProfileRegistry

logger = logging.getLogger(__name__)


def qualified_name(element: Any, separator: str = ".") -> str:
    """Package path of ``element``, outermost package first.

    For a type this is the chain of its owning packages; for a package it
    includes the package itself. The model root is never part of it.
    """
    return separator.join(pkg.name for pkg in package_chain(element))


class TypeResolver:
    """Maps model types to the names used in generated Java source."""

    def __init__(self, registry: Optional[TypeProfileRegistry] = None, java: Optional[JavaMetaModel] = None) -> None:
        self.java: JavaMetaModel = java or DEFAULT_META.java
        if registry is None:
            registry = TypeProfileRegistry(aliases=dict(self.java.primitive_types))
        self.registry = registry

    @property
    def primitive_types(self) -> Dict[str, str]:
        return self.registry.aliases

    def qualified_name(self, element: Any, separator: Optional[str] = None) -> str:
        return qualified_name(element, separator if separator is not None else self.java.package_separator)

    def package_path(self, element: Any) -> str:
        return qualified_name(element, self.java.path_separator)

    def primitive_target_name(self, name: str) -> str:
        return self.registry.resolve(name)

    def target_name(self, t: Optional[UmlType]) -> str:
        if t is None:
            return ""
        if isinstance(t, UmlPrimitiveType):
            return self.primitive_target_name(t.name)
        return t.name

    def type_name(self, typed: Any) -> str:
        """Bare target name of a typed element's type, ``""`` when unresolved."""
        ref = getattr(typed, "type", None)
        return self.target_name(ref.ref if ref is not None else None)

    def rendered_type(self, typed: Any) -> str:
        """Type name wrapped in the list container unless the upper bound is exactly 1."""
        base = self.type_name(typed)
        if not base:
            return ""
        if getattr(typed, "upper", 1) != 1:
            return self.java.list_of(base)
        return base

    def return_type(self, operation: Any) -> str:
        if operation.type is None:
            return self.java.void_type
        return self.rendered_type(operation)


DEFAULT_RESOLVER = TypeResolver()


def primitive_target_name(name: str) -> str:
    return DEFAULT_RESOLVER.primitive_target_name(name)


def rendered_type(typed: Any) -> str:
    return DEFAULT_RESOLVER.rendered_type(typed)


__all__ = [
    "TypeResolver",
    "DEFAULT_RESOLVER",
    "qualified_name",
    "primitive_target_name",
    "rendered_type",
]
