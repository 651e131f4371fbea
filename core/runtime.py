"""
In-memory execution of the relational accessor protocol.

``ModelInstance`` objects behave like instances of the generated classes as far
as association members are concerned: the same guards, the same order of
steps and the same reciprocal calls as the generated Java accessors. Each
accessor entry is appended to ``trace`` so call exchanges can be inspected.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from core.associations import (
    AccessorOp, AssociationSynthesizer, ReciprocalCall, RelationalMember, accessor_name
)
from core.uml_model import UmlClass, UmlModel

logger = logging.getLogger(__name__)


def _contains(values: List[Any], value: Any) -> bool:
    return any(v is value for v in values)


def _remove(values: List[Any], value: Any) -> None:
    for i, v in enumerate(values):
        if v is value:
            del values[i]
            return


class ModelInstance:
    def __init__(self, uml_class: UmlClass, members: List[RelationalMember]) -> None:
        self.uml_class = uml_class
        self._members: Dict[str, RelationalMember] = {m.name: m for m in members}
        self._values: Dict[str, Any] = {
            m.name: ([] if m.is_many else None) for m in members
        }
        self.trace: List[str] = []

    def __repr__(self) -> str:
        return f"<{self.uml_class.name} instance at {id(self):#x}>"

    def _member(self, role: str) -> RelationalMember:
        try:
            return self._members[role]
        except KeyError:
            raise AttributeError(f"{self.uml_class.name} has no relational member '{role}'") from None

    def _notify(self, value: "ModelInstance", call: Optional[ReciprocalCall]) -> None:
        if call is None:
            return
        value.invoke(call.op, call.role, self if call.passes_self else None)

    def invoke(self, op: AccessorOp, role: str, value: Optional["ModelInstance"] = None) -> Any:
        if op is AccessorOp.GET:
            return self.get(role)
        if op is AccessorOp.SIZE_OF:
            return self.size_of(role)
        if op is AccessorOp.SET:
            return self.set(role, value)
        if op is AccessorOp.ADD_TO:
            return self.add_to(role, value)
        return self.remove_from(role, value)

    # ---------- accessors ----------
    def get(self, role: str) -> Union[Optional["ModelInstance"], Tuple["ModelInstance", ...]]:
        member = self._member(role)
        value = self._values[role]
        # read-only view of the backing list
        return tuple(value) if member.is_many else value

    def size_of(self, role: str) -> int:
        member = self._member(role)
        if not member.is_many:
            raise AttributeError(f"'{role}' of {self.uml_class.name} is single valued")
        return len(self._values[role])

    def set(self, role: str, new_value: Optional["ModelInstance"]) -> None:
        member = self._member(role)
        if member.is_many:
            raise AttributeError(f"'{role}' of {self.uml_class.name} is multi valued")
        self.trace.append(accessor_name(AccessorOp.SET, role))
        current = self._values[role]
        if current is new_value:
            return
        if current is not None:
            self._values[role] = None
            self._notify(current, member.detach_call())
        self._values[role] = new_value
        if new_value is not None:
            self._notify(new_value, member.attach_call())

    def add_to(self, role: str, new_value: Optional["ModelInstance"]) -> None:
        member = self._member(role)
        if not member.is_many:
            raise AttributeError(f"'{role}' of {self.uml_class.name} is single valued")
        self.trace.append(accessor_name(AccessorOp.ADD_TO, role))
        values = self._values[role]
        if new_value is None or _contains(values, new_value):
            return
        values.append(new_value)
        self._notify(new_value, member.attach_call())

    def remove_from(self, role: str, old_value: Optional["ModelInstance"]) -> None:
        member = self._member(role)
        if not member.is_many:
            raise AttributeError(f"'{role}' of {self.uml_class.name} is single valued")
        self.trace.append(accessor_name(AccessorOp.REMOVE_FROM, role))
        values = self._values[role]
        if old_value is None or not _contains(values, old_value):
            return
        _remove(values, old_value)
        self._notify(old_value, member.detach_call())


class ModelRuntime:
    """Creates ``ModelInstance`` objects for the classes of one model."""

    def __init__(self, model: UmlModel) -> None:
        self.model = model
        self.synthesizer = AssociationSynthesizer(model)
        self._members: Dict[int, List[RelationalMember]] = {}

    def _class(self, cls: Union[UmlClass, str]) -> UmlClass:
        if isinstance(cls, UmlClass):
            return cls
        found = self.model.find_type(cls)
        if not isinstance(found, UmlClass):
            found = next((c for c in self.model.classes if c.name == cls), None)
        if found is None:
            raise KeyError(f"No class named '{cls}'")
        return found

    def create(self, cls: Union[UmlClass, str]) -> ModelInstance:
        uml_class = self._class(cls)
        members = self._members.get(id(uml_class))
        if members is None:
            members = self.synthesizer.relational_members(uml_class)
            self._members[id(uml_class)] = members
        return ModelInstance(uml_class, members)


__all__ = ["ModelInstance", "ModelRuntime"]
