from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple, Type

from uml_types import (
    ElementKind, Visibility, AggregationType, ElementName
)

logger = logging.getLogger(__name__)

_UNRESOLVED = object()


# ---------- Named reference ----------
class Reference:
    """Named pointer to a type, resolved on first access.

    The reference is scoped by its container (the element that declares it),
    which is set when the owning model is linked. A reference that cannot be
    resolved yields ``None``; it never raises.
    """

    def __init__(self, name: str, target: Optional["UmlType"] = None) -> None:
        self.name = name
        self.container: Optional["UmlElement"] = None
        self.kinds: Tuple[type, ...] = ()
        self._pinned = target is not None
        self._resolved: Any = target if target is not None else _UNRESOLVED

    @classmethod
    def to(cls, target: "UmlType") -> "Reference":
        return cls(target.name, target=target)

    @property
    def ref(self) -> Optional["UmlType"]:
        if self._resolved is _UNRESOLVED:
            if self.container is None:
                # not linked yet, nothing to resolve against
                return None
            from core.namespace import resolve_reference
            self._resolved = resolve_reference(self)
            if self._resolved is None:
                logger.debug(f"Unresolved reference '{self.name}'")
        return self._resolved

    def reset(self) -> None:
        """Forget a looked-up target; targets given explicitly are kept."""
        if not self._pinned:
            self._resolved = _UNRESOLVED

    @property
    def is_resolved(self) -> bool:
        return self.ref is not None

    def __repr__(self) -> str:
        return f"Reference({self.name!r})"


# ---------- Base element ----------
@dataclass(eq=False)
class UmlElement:
    name: ElementName
    container: Optional[Any] = field(default=None, init=False, repr=False)

    def owned_elements(self) -> Iterator["UmlElement"]:
        return iter(())

    def owned_references(self) -> Iterator[Tuple[str, int, Reference]]:
        return iter(())


# ---------- Members ----------
@dataclass(eq=False)
class UmlParameter(UmlElement):
    type: Optional[Reference] = None

    def owned_references(self) -> Iterator[Tuple[str, int, Reference]]:
        if self.type is not None:
            yield "type", 0, self.type


@dataclass(eq=False)
class UmlProperty(UmlElement):
    type: Optional[Reference] = None
    lower: int = 1
    upper: int = 1
    visibility: Optional[Visibility] = None  # None means "not specified"
    is_static: bool = False
    aggregation: AggregationType = AggregationType.NONE

    @property
    def is_many(self) -> bool:
        return self.upper != 1

    def owned_references(self) -> Iterator[Tuple[str, int, Reference]]:
        if self.type is not None:
            yield "type", 0, self.type


@dataclass(eq=False)
class UmlOperation(UmlElement):
    type: Optional[Reference] = None  # None means void
    lower: int = 1
    upper: int = 1
    parameters: List[UmlParameter] = field(default_factory=list)
    visibility: Optional[Visibility] = None
    is_static: bool = False
    is_abstract: bool = False
    description: Optional[str] = None
    content: Optional[str] = None

    def owned_elements(self) -> Iterator[UmlElement]:
        yield from self.parameters

    def owned_references(self) -> Iterator[Tuple[str, int, Reference]]:
        if self.type is not None:
            yield "type", 0, self.type


# ---------- Types ----------
@dataclass(eq=False)
class UmlType(UmlElement):
    kind: ClassVar[ElementKind]

    @property
    def package(self) -> Optional["UmlPackage"]:
        return self.container if isinstance(self.container, UmlPackage) else None


@dataclass(eq=False)
class UmlClass(UmlType):
    kind: ClassVar[ElementKind] = ElementKind.CLASS
    is_abstract: bool = False
    properties: List[UmlProperty] = field(default_factory=list)
    operations: List[UmlOperation] = field(default_factory=list)
    super_classes: List[Reference] = field(default_factory=list)
    super_interfaces: List[Reference] = field(default_factory=list)

    def owned_elements(self) -> Iterator[UmlElement]:
        yield from self.properties
        yield from self.operations

    def owned_references(self) -> Iterator[Tuple[str, int, Reference]]:
        for i, r in enumerate(self.super_classes):
            yield "super_classes", i, r
        for i, r in enumerate(self.super_interfaces):
            yield "super_interfaces", i, r

    @property
    def has_abstract_operations(self) -> bool:
        return any(op.is_abstract for op in self.operations)


@dataclass(eq=False)
class UmlInterface(UmlType):
    kind: ClassVar[ElementKind] = ElementKind.INTERFACE
    properties: List[UmlProperty] = field(default_factory=list)
    operations: List[UmlOperation] = field(default_factory=list)
    super_interfaces: List[Reference] = field(default_factory=list)

    def owned_elements(self) -> Iterator[UmlElement]:
        yield from self.properties
        yield from self.operations

    def owned_references(self) -> Iterator[Tuple[str, int, Reference]]:
        for i, r in enumerate(self.super_interfaces):
            yield "super_interfaces", i, r


@dataclass(eq=False)
class UmlDataType(UmlType):
    kind: ClassVar[ElementKind] = ElementKind.DATATYPE
    properties: List[UmlProperty] = field(default_factory=list)

    def owned_elements(self) -> Iterator[UmlElement]:
        yield from self.properties


@dataclass(eq=False)
class UmlPrimitiveType(UmlType):
    kind: ClassVar[ElementKind] = ElementKind.PRIMITIVE


@dataclass(eq=False)
class UmlEnumeration(UmlType):
    kind: ClassVar[ElementKind] = ElementKind.ENUM
    literals: List[str] = field(default_factory=list)


@dataclass(eq=False)
class UmlAssociation(UmlType):
    kind: ClassVar[ElementKind] = ElementKind.ASSOCIATION
    ends: List[UmlProperty] = field(default_factory=list)

    def owned_elements(self) -> Iterator[UmlElement]:
        yield from self.ends


# Kinds a reference may resolve to, by the name of the referencing field
TYPED_KINDS: Tuple[type, ...] = (
    UmlClass, UmlInterface, UmlDataType, UmlPrimitiveType, UmlEnumeration
)
REFERENCE_KINDS: Dict[str, Tuple[type, ...]] = {
    "type": TYPED_KINDS,
    "super_classes": (UmlClass,),
    "super_interfaces": (UmlInterface,),
}


# ---------- Packages ----------
@dataclass(eq=False)
class UmlPackage(UmlElement):
    packages: List["UmlPackage"] = field(default_factory=list)
    types: List[UmlType] = field(default_factory=list)

    def owned_elements(self) -> Iterator[UmlElement]:
        yield from self.packages
        yield from self.types

    def iter_packages(self) -> Iterator["UmlPackage"]:
        """This package followed by all nested packages, depth first."""
        yield self
        for pkg in self.packages:
            yield from pkg.iter_packages()


# ---------- Model root ----------
@dataclass(eq=False)
class UmlModel:
    packages: List[UmlPackage] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.link()

    def link(self) -> "UmlModel":
        """Set container back-links on every element and reference.

        Called on construction; call again after mutating the tree. Looked-up
        reference targets are dropped and resolved again on next access.
        """
        for pkg in self.packages:
            _adopt(self, pkg)
        self._namespace_index = None
        return self

    def iter_packages(self) -> Iterator[UmlPackage]:
        for pkg in self.packages:
            yield from pkg.iter_packages()

    def iter_types(self) -> Iterator[UmlType]:
        for pkg in self.iter_packages():
            yield from pkg.types

    def iter_elements(self) -> Iterator[UmlElement]:
        """Every element of the tree, depth first, containers before children."""
        def rec(el: UmlElement) -> Iterator[UmlElement]:
            yield el
            for child in el.owned_elements():
                yield from rec(child)
        for pkg in self.packages:
            yield from rec(pkg)

    def types_of_kind(self, cls: Type[UmlType]) -> List[UmlType]:
        return [t for t in self.iter_types() if isinstance(t, cls)]

    @property
    def classes(self) -> List[UmlClass]:
        return self.types_of_kind(UmlClass)  # type: ignore[return-value]

    @property
    def interfaces(self) -> List[UmlInterface]:
        return self.types_of_kind(UmlInterface)  # type: ignore[return-value]

    @property
    def associations(self) -> List[UmlAssociation]:
        return self.types_of_kind(UmlAssociation)  # type: ignore[return-value]

    def find_type(self, qualified_name: str) -> Optional[UmlType]:
        """Look up a type by its qualified name (``de.university.Test``)."""
        from core.namespace import resolve_qualified
        return resolve_qualified(self, qualified_name, TYPED_KINDS + (UmlAssociation,))


def _adopt(container: Any, element: UmlElement) -> None:
    element.container = container
    for field_name, _, ref in element.owned_references():
        ref.container = element
        ref.reset()
        ref.kinds = REFERENCE_KINDS.get(field_name, TYPED_KINDS)
    for child in element.owned_elements():
        _adopt(element, child)


__all__ = [
    "Reference",
    "UmlElement", "UmlParameter", "UmlProperty", "UmlOperation",
    "UmlType", "UmlClass", "UmlInterface", "UmlDataType",
    "UmlPrimitiveType", "UmlEnumeration", "UmlAssociation",
    "UmlPackage", "UmlModel",
    "TYPED_KINDS", "REFERENCE_KINDS",
]
