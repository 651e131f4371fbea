#!/usr/bin/env python3
"""
Association synthesis.

Every class participating in an association receives a relational member for
the association end on the far side. Accessors of relational members keep
both participants consistent by calling the matching accessor of the other
object; the calls described here are rendered by the Java generator and
executed by ``core.runtime``.

Protocol, for a member ``m`` of class ``C`` whose opposite end is ``o``:

- single valued ``set<M>(v)``: no-op when ``v`` is the current value;
  otherwise detach the current value (clear the field, then call
  ``removeFrom<O>(this)`` on it when ``o`` is multi valued or ``set<O>(null)``
  when ``o`` is single valued), assign ``v`` and, when ``v`` is not null, call
  ``addTo<O>(this)`` or ``set<O>(this)`` on it.
- multi valued ``addTo<M>(v)``: no-op when ``v`` is null or already present;
  append, then call ``set<O>(this)`` or ``addTo<O>(this)`` on ``v``.
- multi valued ``removeFrom<M>(v)``: no-op when absent; remove, then call
  ``set<O>(null)`` or ``removeFrom<O>(this)`` on ``v``.

There is no re-entrancy guard: each reciprocal call ends at the no-op guard
of the side that already holds the new state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from core.uml_model import (
    UmlAssociation, UmlClass, UmlModel, UmlProperty, UmlType
)
from uml_types import AggregationType
from utils.naming import upper_first

logger = logging.getLogger(__name__)


class AccessorOp(Enum):
    GET = "get"
    SET = "set"
    ADD_TO = "addTo"
    REMOVE_FROM = "removeFrom"
    SIZE_OF = "sizeOf"


def accessor_name(op: AccessorOp, member_name: str) -> str:
    return f"{op.value}{upper_first(member_name)}"


@dataclass(frozen=True)
class ReciprocalCall:
    """Call made on the other participant after a local state change."""
    op: AccessorOp
    role: str             # name of the opposite end
    passes_self: bool     # argument is ``this`` (True) or ``null`` (False)

    @property
    def method_name(self) -> str:
        return accessor_name(self.op, self.role)


def opposite_property(prop: UmlProperty) -> Optional[UmlProperty]:
    """The other end of the association owning ``prop``.

    Only defined for association ends; the first end that is not ``prop``.
    """
    assoc = prop.container
    if not isinstance(assoc, UmlAssociation):
        return None
    for end in assoc.ends:
        if end is not prop:
            return end
    return None


def participant(end: UmlProperty) -> Optional[UmlType]:
    return end.type.ref if end.type is not None else None


@dataclass(eq=False)
class RelationalMember:
    """Class member synthesized from an association end."""
    owner: UmlClass
    end: UmlProperty        # the foreign end, its name and multiplicity are used
    opposite: UmlProperty   # the end typed with ``owner``

    @property
    def association(self) -> UmlAssociation:
        return self.end.container

    @property
    def name(self) -> str:
        return self.end.name

    @property
    def target(self) -> Optional[UmlType]:
        return participant(self.end)

    @property
    def lower(self) -> int:
        return self.end.lower

    @property
    def upper(self) -> int:
        return self.end.upper

    @property
    def is_many(self) -> bool:
        return self.end.is_many

    @property
    def aggregation(self) -> AggregationType:
        return self.end.aggregation

    @property
    def bidirectional(self) -> bool:
        """Reciprocal calls are only made on objects of generated classes."""
        return isinstance(self.target, UmlClass)

    def attach_call(self) -> Optional[ReciprocalCall]:
        """Call made on a value after it was linked to this object."""
        if not self.bidirectional:
            return None
        if self.opposite.is_many:
            return ReciprocalCall(AccessorOp.ADD_TO, self.opposite.name, passes_self=True)
        return ReciprocalCall(AccessorOp.SET, self.opposite.name, passes_self=True)

    def detach_call(self) -> Optional[ReciprocalCall]:
        """Call made on a value after it was unlinked from this object."""
        if not self.bidirectional:
            return None
        if self.opposite.is_many:
            return ReciprocalCall(AccessorOp.REMOVE_FROM, self.opposite.name, passes_self=True)
        return ReciprocalCall(AccessorOp.SET, self.opposite.name, passes_self=False)

    def accessor(self, op: AccessorOp) -> str:
        return accessor_name(op, self.name)


def foreign_ends(association: UmlAssociation, cls: UmlClass) -> List[UmlProperty]:
    """Ends of ``association`` that become members of ``cls``.

    The end not typed with ``cls``; for a reflexive association both ends in
    declaration order, each paired with the other one as opposite.
    """
    if len(association.ends) != 2:
        logger.debug(f"Skipping association '{association.name}' with {len(association.ends)} ends")
        return []
    first, second = association.ends
    first_is_cls = participant(first) is cls
    second_is_cls = participant(second) is cls
    if first_is_cls and second_is_cls:
        return [first, second]
    if first_is_cls:
        return [second]
    if second_is_cls:
        return [first]
    return []


class AssociationSynthesizer:
    """Computes relational members for the classes of one model."""

    def __init__(self, model: UmlModel) -> None:
        self.model = model
        self._by_class: Dict[int, List[UmlAssociation]] = {}
        for assoc in model.associations:
            seen: List[UmlType] = []
            for end in assoc.ends:
                t = participant(end)
                if isinstance(t, UmlClass) and not any(t is s for s in seen):
                    seen.append(t)
                    self._by_class.setdefault(id(t), []).append(assoc)
        logger.debug(f"Indexed {len(model.associations)} associations")

    def applicable_associations(self, cls: UmlClass) -> List[UmlAssociation]:
        """Associations anywhere in the model with an end typed ``cls``."""
        return list(self._by_class.get(id(cls), []))

    def relational_members(self, cls: UmlClass) -> List[RelationalMember]:
        members: List[RelationalMember] = []
        for assoc in self.applicable_associations(cls):
            for end in foreign_ends(assoc, cls):
                if participant(end) is None:
                    logger.debug(f"Skipping end '{end.name}' of '{assoc.name}': unresolved participant")
                    continue
                opposite = opposite_property(end)
                if opposite is None:
                    continue
                members.append(RelationalMember(owner=cls, end=end, opposite=opposite))
        return members


__all__ = [
    "AccessorOp",
    "ReciprocalCall",
    "RelationalMember",
    "AssociationSynthesizer",
    "accessor_name",
    "opposite_property",
    "participant",
    "foreign_ends",
]
