#!/usr/bin/env python3
"""
Structural validation of a class-diagram model.

Validation never raises: every finding is returned as a ``Diagnostic`` and
generation proceeds on a best-effort basis.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from core.associations import AssociationSynthesizer
from core.graph import class_graph, interface_graph
from core.uml_model import (
    UmlAssociation, UmlClass, UmlDataType, UmlElement, UmlEnumeration,
    UmlInterface, UmlModel, UmlOperation, UmlProperty
)
from uml_types import Severity
from utils.naming import is_all_capitals, starts_with_capital, starts_with_lowercase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    message: str
    target: Any                  # element the diagnostic is anchored at
    field: str = "name"          # attribute of ``target`` it refers to
    index: Optional[int] = None  # position within ``field`` for list attributes

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def __str__(self) -> str:
        where = getattr(self.target, "name", type(self.target).__name__)
        suffix = f"[{self.index}]" if self.index is not None else ""
        return f"{self.severity}: {self.message} ({where}.{self.field}{suffix})"


class ModelValidator:
    def __init__(self, report_unresolved_references: bool = True) -> None:
        self.report_unresolved_references = report_unresolved_references
        self._diagnostics: List[Diagnostic] = []

    def _emit(self, severity: Severity, message: str, target: Any, field: str = "name", index: Optional[int] = None) -> None:
        self._diagnostics.append(Diagnostic(severity, message, target, field, index))

    def validate(self, model: UmlModel) -> List[Diagnostic]:
        self._diagnostics = []
        self._check_naming(model)
        self._check_duplicates(model)
        self._check_inheritance_cycles(model)
        self._check_association_arity(model)
        self._check_abstract_operations(model)
        self._check_relational_members(model)
        if self.report_unresolved_references:
            self._check_references(model)
        errors = sum(1 for d in self._diagnostics if d.is_error)
        logger.info(f"Validation finished: {errors} errors, {len(self._diagnostics) - errors} warnings")
        return list(self._diagnostics)

    # ---------- naming conventions ----------
    def _check_naming(self, model: UmlModel) -> None:
        for t in model.iter_types():
            # association names are edge labels, not type names
            if not isinstance(t, UmlAssociation) and t.name and not starts_with_capital(t.name):
                self._emit("warning", "Type name should start with a capital.", t)
            for i, literal in enumerate(t.literals if isinstance(t, UmlEnumeration) else []):
                if literal and not is_all_capitals(literal):
                    self._emit("warning", "Enumeration literal should consist of capitals.", t, "literals", i)
        for el in model.iter_elements():
            if isinstance(el, UmlProperty) and el.name and not starts_with_lowercase(el.name):
                self._emit("warning", "Property name should start with lowercase.", el)
            elif isinstance(el, UmlOperation) and el.name and not starts_with_lowercase(el.name):
                self._emit("warning", "Operation name should start with lowercase.", el)

    # ---------- duplicate names ----------
    def _flag_duplicates(self, items: Sequence[UmlElement], label: str) -> None:
        by_name: Dict[str, List[UmlElement]] = defaultdict(list)
        for item in items:
            by_name[item.name].append(item)
        for item in items:
            if len(by_name[item.name]) > 1:
                self._emit("error", f"Duplicate {label} name '{item.name}'.", item)

    def _check_duplicates(self, model: UmlModel) -> None:
        self._flag_duplicates(model.packages, "package")
        for pkg in model.iter_packages():
            self._flag_duplicates(pkg.packages, "package")
            self._flag_duplicates(pkg.types, "type")
            for t in pkg.types:
                if isinstance(t, (UmlClass, UmlInterface, UmlDataType)):
                    self._flag_duplicates(t.properties, "property")
                if isinstance(t, (UmlClass, UmlInterface)):
                    self._flag_duplicates(t.operations, "operation")
                if isinstance(t, UmlAssociation):
                    self._flag_duplicates(t.ends, "property")
                if isinstance(t, UmlEnumeration):
                    self._check_duplicate_literals(t)

    def _check_duplicate_literals(self, enum: UmlEnumeration) -> None:
        counts: Dict[str, int] = defaultdict(int)
        for literal in enum.literals:
            counts[literal] += 1
        for i, literal in enumerate(enum.literals):
            if counts[literal] > 1:
                self._emit("error", f"Duplicate enumeration literal name '{literal}'.", enum, "literals", i)

    # ---------- inheritance cycles ----------
    def _check_inheritance_cycles(self, model: UmlModel) -> None:
        for finding in class_graph(model).find_cycles():
            self._emit("error", "Cycle in class inheritance", finding.node, finding.field, finding.index)
        for finding in interface_graph(model).find_cycles():
            self._emit("error", "Cycle in interface inheritance", finding.node, finding.field, finding.index)

    # ---------- associations ----------
    def _check_association_arity(self, model: UmlModel) -> None:
        for assoc in model.associations:
            if len(assoc.ends) != 2:
                self._emit("error", "Association must have exactly two ends.", assoc, "ends")

    def _check_abstract_operations(self, model: UmlModel) -> None:
        for cls in model.classes:
            if cls.has_abstract_operations and not cls.is_abstract:
                self._emit("error", "Class with abstract operations must be declared abstract.", cls)

    def _check_relational_members(self, model: UmlModel) -> None:
        synthesizer = AssociationSynthesizer(model)
        for cls in model.classes:
            declared = {p.name for p in cls.properties}
            members = synthesizer.relational_members(cls)
            by_name: Dict[str, int] = defaultdict(int)
            for m in members:
                by_name[m.name] += 1
            for m in members:
                if m.name in declared:
                    self._emit("error", f"Association end '{m.name}' clashes with property '{m.name}'.", m.end)
                elif by_name[m.name] > 1:
                    self._emit("error", f"Duplicate association end name '{m.name}' for class '{cls.name}'.", m.end)

    # ---------- references ----------
    def _check_references(self, model: UmlModel) -> None:
        for el in model.iter_elements():
            for field_name, index, ref in el.owned_references():
                if ref.ref is None:
                    self._emit("warning", f"Could not resolve reference to '{ref.name}'.", el, field_name, index)


def validate(model: UmlModel, report_unresolved_references: bool = True) -> List[Diagnostic]:
    return ModelValidator(report_unresolved_references).validate(model)


__all__ = ["Diagnostic", "ModelValidator", "validate"]
