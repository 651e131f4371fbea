from __future__ import annotations

from typing import List, Optional

from meta import DEFAULT_META, PlantUmlMetaModel
from uml_types import AggregationType, UNBOUNDED, Visibility


def pu_bound(value: int, meta: Optional[PlantUmlMetaModel] = None) -> str:
    meta = meta or DEFAULT_META.plantuml
    return meta.unbounded if value == UNBOUNDED else str(value)


def pu_multiplicity(lower: int, upper: int, meta: Optional[PlantUmlMetaModel] = None) -> str:
    """Edge label for a multiplicity: ``1``, ``0..1``, ``1..*``."""
    if lower == upper:
        return pu_bound(lower, meta)
    return f"{pu_bound(lower, meta)}..{pu_bound(upper, meta)}"


KNOWN_CARDINALITIES = ((0, 1), (0, UNBOUNDED), (1, UNBOUNDED))


def pu_cardinality(lower: int, upper: int, meta: Optional[PlantUmlMetaModel] = None) -> str:
    """Member suffix ``[0..1]``, ``[0..*]`` or ``[1..*]``; empty for any other bounds."""
    if (lower, upper) not in KNOWN_CARDINALITIES:
        return ""
    return f"[{pu_bound(lower, meta)}..{pu_bound(upper, meta)}]"


def pu_member(name: str, type_name: str = "", visibility: Optional[Visibility] = None,
              is_static: bool = False, is_abstract: bool = False, cardinality: str = "",
              meta: Optional[PlantUmlMetaModel] = None) -> str:
    meta = meta or DEFAULT_META.plantuml
    parts: List[str] = [meta.visibility_glyph(visibility or meta.default_visibility)]
    if is_abstract:
        parts.append(meta.abstract_modifier)
    if is_static:
        parts.append(meta.static_modifier)
    parts.append(name)
    text = " ".join(parts)
    if type_name:
        text += f" : {type_name}"
    if cardinality:
        text += f" {cardinality}"
    return text


def pu_edge_glyph(left: AggregationType, right: AggregationType,
                  meta: Optional[PlantUmlMetaModel] = None) -> str:
    """``--``, ``o--``, ``*--``, optionally mirrored on the right (``--o``, ``--*``)."""
    meta = meta or DEFAULT_META.plantuml
    return f"{meta.aggregation_glyph(left)}{meta.line}{meta.aggregation_glyph(right)}"


def pu_association(source: str, source_mult: str, glyph: str, target_mult: str,
                   target: str, label: str = "", meta: Optional[PlantUmlMetaModel] = None) -> str:
    meta = meta or DEFAULT_META.plantuml
    text = f'{source} "{source_mult}" {glyph} "{target_mult}" {target}'
    if label:
        text += f" : {label} {meta.label_direction}"
    return text


def pu_generalization(general: str, specific: str, meta: Optional[PlantUmlMetaModel] = None) -> str:
    meta = meta or DEFAULT_META.plantuml
    return f"{general} {meta.generalization_arrow} {specific}"


def pu_realization(contract: str, implementer: str, meta: Optional[PlantUmlMetaModel] = None) -> str:
    meta = meta or DEFAULT_META.plantuml
    return f"{contract} {meta.realization_arrow} {implementer}"


class PlantUmlWriter:
    """Accumulates one ``@startuml`` document."""

    def __init__(self, indent: str = "    ", meta: Optional[PlantUmlMetaModel] = None) -> None:
        self.indent = indent
        self.meta = meta or DEFAULT_META.plantuml
        self._lines: List[str] = [self.meta.start]
        self._depth = 0

    def line(self, text: str = "") -> None:
        self._lines.append(self.indent * self._depth + text if text else "")

    def blank(self) -> None:
        if self._lines and self._lines[-1] != "" and not self._lines[-1].endswith("{"):
            self._lines.append("")

    def start_box(self, header: str) -> None:
        self.line(f"{header} {{")
        self._depth += 1

    def end_box(self) -> None:
        self._depth -= 1
        self.line("}")

    def getvalue(self) -> str:
        while self._lines and self._lines[-1] == "":
            self._lines.pop()
        return "\n".join(self._lines + [self.meta.end]) + "\n"


__all__ = [
    "PlantUmlWriter",
    "pu_bound",
    "pu_multiplicity",
    "pu_cardinality",
    "pu_member",
    "pu_edge_glyph",
    "pu_association",
    "pu_generalization",
    "pu_realization",
]
