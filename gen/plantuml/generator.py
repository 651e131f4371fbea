#!/usr/bin/env python3
"""
PlantUML class-diagram generator: one document per package with types.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from app.config import GeneratorConfig, DEFAULT_CONFIG
from core.type_resolver import qualified_name
from core.uml_model import (
    UmlAssociation, UmlClass, UmlDataType, UmlEnumeration, UmlInterface,
    UmlModel, UmlOperation, UmlPackage, UmlPrimitiveType, UmlProperty, UmlType
)
from gen.plantuml.writer import (
    PlantUmlWriter, pu_association, pu_cardinality, pu_edge_glyph,
    pu_generalization, pu_member, pu_multiplicity, pu_realization
)
from meta import DEFAULT_META, PlantUmlMetaModel

logger = logging.getLogger(__name__)


@dataclass
class DiagramDocument:
    name: str
    package: str
    text: str
    element: Optional[UmlPackage] = field(default=None, repr=False, compare=False)

    @property
    def file_name(self) -> str:
        return self.name + DEFAULT_META.plantuml.file_extension


def _domain_type(typed: Any) -> str:
    ref = getattr(typed, "type", None)
    target = ref.ref if ref is not None else None
    return target.name if target is not None else ""


class PlantUmlGenerator:
    def __init__(self, model: UmlModel, config: Optional[GeneratorConfig] = None,
                 meta: Optional[PlantUmlMetaModel] = None) -> None:
        self.model = model
        self.config = config or DEFAULT_CONFIG
        self.meta = meta or DEFAULT_META.plantuml

    def document_name(self, pkg: UmlPackage) -> str:
        return f"{self.config.diagram_base_name}_{qualified_name(pkg)}"

    # ---------- members ----------
    def _property_line(self, prop: UmlProperty) -> str:
        return pu_member(
            prop.name,
            _domain_type(prop),
            visibility=prop.visibility,
            is_static=prop.is_static,
            cardinality=pu_cardinality(prop.lower, prop.upper, self.meta),
            meta=self.meta,
        )

    def _operation_line(self, op: UmlOperation) -> str:
        params = ", ".join(
            f"{p.name} : {_domain_type(p)}" if _domain_type(p) else p.name
            for p in op.parameters
        )
        cardinality = pu_cardinality(op.lower, op.upper, self.meta) if op.type is not None else ""
        return pu_member(
            f"{op.name}({params})",
            _domain_type(op),
            visibility=op.visibility,
            is_static=op.is_static,
            is_abstract=op.is_abstract,
            cardinality=cardinality,
            meta=self.meta,
        )

    def _box(self, writer: PlantUmlWriter, header: str, lines: List[str]) -> None:
        if not lines:
            writer.line(header)
            return
        writer.start_box(header)
        for text in lines:
            writer.line(text)
        writer.end_box()

    # ---------- boxes ----------
    def _write_primitive(self, writer: PlantUmlWriter, t: UmlPrimitiveType) -> None:
        writer.line(f"class {t.name} {self.meta.primitive_stereotype}")

    def _write_datatype(self, writer: PlantUmlWriter, t: UmlDataType) -> None:
        self._box(writer, f"class {t.name} {self.meta.datatype_stereotype}",
                  [self._property_line(p) for p in t.properties])

    def _write_class(self, writer: PlantUmlWriter, t: UmlClass) -> None:
        keyword = "abstract class" if t.is_abstract else "class"
        lines = [self._property_line(p) for p in t.properties]
        lines += [self._operation_line(op) for op in t.operations]
        self._box(writer, f"{keyword} {t.name}", lines)

    def _write_enumeration(self, writer: PlantUmlWriter, t: UmlEnumeration) -> None:
        self._box(writer, f"enum {t.name}", list(t.literals))

    def _write_interface(self, writer: PlantUmlWriter, t: UmlInterface) -> None:
        lines = [self._property_line(p) for p in t.properties]
        lines += [self._operation_line(op) for op in t.operations]
        self._box(writer, f"interface {t.name}", lines)

    # ---------- relationships ----------
    def _relations(self, types: List[UmlType]) -> List[str]:
        lines: List[str] = []
        for t in types:
            if isinstance(t, UmlClass):
                for ref in t.super_classes:
                    if ref.ref is not None:
                        lines.append(pu_generalization(ref.ref.name, t.name, self.meta))
                for ref in t.super_interfaces:
                    if ref.ref is not None:
                        lines.append(pu_realization(ref.ref.name, t.name, self.meta))
            elif isinstance(t, UmlInterface):
                for ref in t.super_interfaces:
                    if ref.ref is not None:
                        lines.append(pu_generalization(ref.ref.name, t.name, self.meta))
        for t in types:
            if isinstance(t, UmlAssociation):
                edge = self._association_line(t)
                if edge:
                    lines.append(edge)
        return lines

    def _association_line(self, assoc: UmlAssociation) -> Optional[str]:
        if len(assoc.ends) != 2:
            logger.debug(f"No diagram edge for association '{assoc.name}' with {len(assoc.ends)} ends")
            return None
        first, second = assoc.ends
        source, target = _domain_type(first), _domain_type(second)
        if not source or not target:
            logger.debug(f"No diagram edge for association '{assoc.name}': unresolved participant")
            return None
        return pu_association(
            source,
            pu_multiplicity(first.lower, first.upper, self.meta),
            pu_edge_glyph(second.aggregation, first.aggregation, self.meta),
            pu_multiplicity(second.lower, second.upper, self.meta),
            target,
            assoc.name,
            self.meta,
        )

    # ---------- documents ----------
    def generate_package(self, pkg: UmlPackage) -> Optional[DiagramDocument]:
        if not pkg.types:
            return None
        writer = PlantUmlWriter(self.config.indent, self.meta)
        primitives = [t for t in pkg.types if isinstance(t, UmlPrimitiveType)]
        datatypes = [t for t in pkg.types if isinstance(t, UmlDataType)]

        for t in primitives:
            self._write_primitive(writer, t)
        for t in datatypes:
            self._write_datatype(writer, t)
        for t in pkg.types:
            if isinstance(t, UmlClass):
                self._write_class(writer, t)
        for t in pkg.types:
            if isinstance(t, UmlEnumeration):
                self._write_enumeration(writer, t)
        for t in pkg.types:
            if isinstance(t, UmlInterface):
                self._write_interface(writer, t)

        relations = self._relations(pkg.types)
        if relations:
            writer.blank()
            for text in relations:
                writer.line(text)

        if primitives or datatypes:
            writer.blank()
        if primitives:
            writer.line(f"hide {self.meta.primitive_stereotype} members")
            writer.line(f"hide {self.meta.primitive_stereotype} circle")
        if datatypes:
            writer.line(f"hide {self.meta.datatype_stereotype} circle")

        return DiagramDocument(
            name=self.document_name(pkg),
            package=qualified_name(pkg),
            text=writer.getvalue(),
            element=pkg,
        )

    def generate(self) -> List[DiagramDocument]:
        documents: List[DiagramDocument] = []
        for pkg in self.model.iter_packages():
            doc = self.generate_package(pkg)
            if doc is not None:
                documents.append(doc)
        logger.info(f"Generated {len(documents)} diagram documents")
        return documents


__all__ = ["DiagramDocument", "PlantUmlGenerator"]
