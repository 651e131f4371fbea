from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from core.uml_model import (
    Reference, UmlElement, UmlModel, UmlPackage, UmlType, TYPED_KINDS
)

logger = logging.getLogger(__name__)

# Qualified names are accepted with '.', '/' or '::' between segments
_QUALIFIER_RE = re.compile(r"::|[./]")


@dataclass
class NamespaceNode:
    name: str
    children: Dict[str, "NamespaceNode"] = field(default_factory=dict)
    types: Dict[str, List[UmlType]] = field(default_factory=dict)


def build_namespace_tree(model: UmlModel) -> NamespaceNode:
    """Build a NamespaceNode tree mirroring the model's packages.

    Sibling packages sharing a name are merged into one node; that clash is
    reported by the validator, lookups simply see the union.
    """
    root = NamespaceNode(name="__root__")

    def rec(node: NamespaceNode, pkg: UmlPackage) -> None:
        child = node.children.get(pkg.name)
        if child is None:
            child = NamespaceNode(name=pkg.name)
            node.children[pkg.name] = child
        for t in pkg.types:
            child.types.setdefault(t.name, []).append(t)
        for sub in pkg.packages:
            rec(child, sub)

    for pkg in model.packages:
        rec(root, pkg)
    return root


def namespace_tree(model: UmlModel) -> NamespaceNode:
    tree = getattr(model, "_namespace_index", None)
    if tree is None:
        tree = build_namespace_tree(model)
        model._namespace_index = tree
    return tree


def split_qualified(name: str) -> List[str]:
    return [part for part in _QUALIFIER_RE.split(name) if part]


def model_of(element: Any) -> Optional[UmlModel]:
    current = element
    while current is not None and not isinstance(current, UmlModel):
        current = getattr(current, "container", None)
    return current


def enclosing_package(element: Any) -> Optional[UmlPackage]:
    """Nearest package containing ``element`` (a package is not its own enclosure)."""
    current = getattr(element, "container", None)
    while current is not None and not isinstance(current, UmlPackage):
        current = getattr(current, "container", None)
    return current


def package_chain(element: Any) -> List[UmlPackage]:
    """Owning packages of ``element``, outermost first.

    For a package the chain ends with the package itself; for any other
    element it ends with the nearest enclosing package.
    """
    chain: List[UmlPackage] = []
    current = element if isinstance(element, UmlPackage) else enclosing_package(element)
    while current is not None:
        chain.append(current)
        current = enclosing_package(current)
    chain.reverse()
    return chain


def _first_of_kind(candidates: List[UmlType], kinds: Tuple[type, ...]) -> Optional[UmlType]:
    for candidate in candidates:
        if isinstance(candidate, kinds):
            return candidate
    return None


def resolve_qualified(model: UmlModel, name: str, kinds: Tuple[type, ...] = TYPED_KINDS) -> Optional[UmlType]:
    parts = split_qualified(name)
    if not parts:
        return None
    node = namespace_tree(model)
    for part in parts[:-1]:
        node = node.children.get(part)
        if node is None:
            return None
    return _first_of_kind(node.types.get(parts[-1], []), kinds)


def resolve(name: str, scope: UmlElement, kinds: Tuple[type, ...] = TYPED_KINDS) -> Optional[UmlType]:
    """Resolve ``name`` as seen from ``scope``.

    Qualified names are looked up from the model root. Simple names are
    looked up in the enclosing package, then each package further out, then
    across all packages of the model.
    """
    if not name:
        return None
    model = model_of(scope)
    if model is None:
        return None

    if len(split_qualified(name)) > 1:
        return resolve_qualified(model, name, kinds)

    pkg = scope if isinstance(scope, UmlPackage) else enclosing_package(scope)
    while pkg is not None:
        found = _first_of_kind([t for t in pkg.types if t.name == name], kinds)
        if found is not None:
            return found
        pkg = enclosing_package(pkg)

    for t in model.iter_types():
        if t.name == name and isinstance(t, kinds):
            return t
    return None


def resolve_reference(reference: Reference) -> Optional[UmlType]:
    if reference.container is None:
        return None
    return resolve(reference.name, reference.container, reference.kinds or TYPED_KINDS)


__all__ = [
    "NamespaceNode",
    "build_namespace_tree",
    "namespace_tree",
    "split_qualified",
    "model_of",
    "enclosing_package",
    "package_chain",
    "resolve_qualified",
    "resolve",
    "resolve_reference",
]
