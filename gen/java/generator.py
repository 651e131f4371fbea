#!/usr/bin/env python3
"""
Java source generator.

Renders classes, interfaces, data types (as records) and enumerations of a
model as Java compilation units. Output is returned as text; writing files is
left to the caller.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set

from app.config import GeneratorConfig, DEFAULT_CONFIG
from core.associations import AccessorOp, AssociationSynthesizer, ReciprocalCall, RelationalMember
from core.type_resolver import TypeResolver
from core.uml_model import (
    UmlClass, UmlDataType, UmlEnumeration, UmlInterface, UmlModel,
    UmlOperation, UmlPrimitiveType, UmlProperty, UmlType
)
from gen.java.writer import JavaWriter, modifiers
from meta import DEFAULT_META, JavaMetaModel
from uml_types import ElementKind, Visibility
from utils.naming import upper_first

logger = logging.getLogger(__name__)


@dataclass
class SourceUnit:
    name: str        # simple type name
    package: str     # dot-qualified package
    path: str        # slash-qualified relative path of the compilation unit
    text: str
    element: Optional[UmlType] = field(default=None, repr=False, compare=False)

    @property
    def file_name(self) -> str:
        return self.name + DEFAULT_META.java.file_extension


class JavaElementVisitor:
    def visit_class(self, info: UmlClass) -> str:
        raise NotImplementedError

    def visit_interface(self, info: UmlInterface) -> str:
        raise NotImplementedError

    def visit_datatype(self, info: UmlDataType) -> str:
        raise NotImplementedError

    def visit_enumeration(self, info: UmlEnumeration) -> str:
        raise NotImplementedError


class JavaSourceVisitor(JavaElementVisitor):
    def __init__(self, resolver: TypeResolver, synthesizer: AssociationSynthesizer,
                 indent: str = "    ", java: Optional[JavaMetaModel] = None) -> None:
        self.resolver = resolver
        self.synthesizer = synthesizer
        self.indent = indent
        self.java: JavaMetaModel = java or DEFAULT_META.java

    # ---------- shared pieces ----------
    def _new_writer(self, info: UmlType) -> JavaWriter:
        writer = JavaWriter(self.indent)
        writer.write_package(self.resolver.qualified_name(info))
        return writer

    def _type_import(self, t: Optional[UmlType], own_package: str, imports: Set[str]) -> None:
        if t is None:
            return
        if isinstance(t, UmlPrimitiveType):
            imp = self.resolver.registry.import_of(self.resolver.primitive_target_name(t.name))
            if imp:
                imports.add(imp)
            return
        pkg = self.resolver.qualified_name(t)
        if pkg and pkg != own_package:
            imports.add(f"{pkg}.{t.name}")

    def _typed_imports(self, typed: object, own_package: str, imports: Set[str]) -> None:
        ref = getattr(typed, "type", None)
        target = ref.ref if ref is not None else None
        if target is None:
            return
        self._type_import(target, own_package, imports)
        if getattr(typed, "upper", 1) != 1:
            imports.add(self.java.list_import)

    def _operation_imports(self, operations: List[UmlOperation], own_package: str, imports: Set[str]) -> None:
        for op in operations:
            self._typed_imports(op, own_package, imports)
            for param in op.parameters:
                self._typed_imports(param, own_package, imports)

    def _super_names(self, refs: list, own_package: str, imports: Set[str]) -> List[str]:
        names: List[str] = []
        for ref in refs:
            target = ref.ref
            if target is None:
                logger.debug(f"Omitting unresolved super type '{ref.name}'")
                continue
            self._type_import(target, own_package, imports)
            names.append(target.name)
        return names

    def _signature(self, op: UmlOperation) -> str:
        params = ", ".join(f"{self.resolver.rendered_type(p)} {p.name}" for p in op.parameters)
        return f"{self.resolver.return_type(op)} {op.name}({params})"

    def _operation_javadoc(self, writer: JavaWriter, op: UmlOperation) -> None:
        tag = self.java.modified_tag if op.content else self.java.generated_tag
        writer.write_javadoc(op.description, [tag])

    def _placeholder_body(self, writer: JavaWriter) -> None:
        writer.line(f"throw new {self.java.unimplemented_exception}();")

    # ---------- classes ----------
    def visit_class(self, info: UmlClass) -> str:
        own_package = self.resolver.qualified_name(info)
        members = self.synthesizer.relational_members(info)
        imports: Set[str] = set()

        extends = self._super_names(info.super_classes, own_package, imports)
        implements = self._super_names(info.super_interfaces, own_package, imports)
        for prop in info.properties:
            self._typed_imports(prop, own_package, imports)
            if prop.is_many:
                imports.add(self.java.list_impl_import)
        for m in members:
            self._type_import(m.target, own_package, imports)
            if m.is_many:
                imports.update([self.java.list_import, self.java.list_impl_import, self.java.collections_import])
        self._operation_imports(info.operations, own_package, imports)

        writer = self._new_writer(info)
        writer.write_imports(imports)

        header = modifiers("public", "abstract" if info.is_abstract else "", "class", info.name)
        if extends:
            header += " extends " + ", ".join(extends)
        if implements:
            header += " implements " + ", ".join(implements)
        writer.start_block(header)

        for prop in info.properties:
            self._write_field(writer, info, prop)
        writer.blank()
        for m in members:
            self._write_relational_field(writer, m)
        writer.blank()
        for prop in info.properties:
            self._write_plain_accessors(writer, info, prop)
        for m in members:
            self._write_relational_accessors(writer, m)
        for op in info.operations:
            self._write_class_operation(writer, op)

        writer.end_block()
        return writer.getvalue()

    def _initializer(self, is_many: bool) -> str:
        return f" = new {self.java.list_impl_type}<>()" if is_many else ""

    def _write_field(self, writer: JavaWriter, info: UmlClass, prop: UmlProperty) -> None:
        decl = modifiers("private", "static" if prop.is_static else "", self.resolver.rendered_type(prop), prop.name)
        writer.line(f"{decl}{self._initializer(prop.is_many)};")

    def _member_type(self, m: RelationalMember) -> str:
        base = self.resolver.target_name(m.target)
        return self.java.list_of(base) if m.is_many else base

    def _write_relational_field(self, writer: JavaWriter, m: RelationalMember) -> None:
        writer.line(f"private {self._member_type(m)} {m.name}{self._initializer(m.is_many)};")

    def _write_plain_accessors(self, writer: JavaWriter, info: UmlClass, prop: UmlProperty) -> None:
        visibility = self.java.visibility_keyword(prop.visibility or Visibility.PUBLIC)
        static = "static" if prop.is_static else ""
        holder = info.name if prop.is_static else self.java.self_literal
        type_name = self.resolver.rendered_type(prop)
        suffix = upper_first(prop.name)

        writer.blank()
        writer.start_block(f"{modifiers(visibility, static, type_name, 'get' + suffix)}()")
        writer.line(f"return {holder}.{prop.name};")
        writer.end_block()
        writer.blank()
        writer.start_block(f"{modifiers(visibility, static, self.java.void_type, 'set' + suffix)}({type_name} {prop.name})")
        writer.line(f"{holder}.{prop.name} = {prop.name};")
        writer.end_block()

    def _call(self, receiver: str, call: Optional[ReciprocalCall]) -> Optional[str]:
        if call is None:
            return None
        argument = self.java.self_literal if call.passes_self else self.java.null_literal
        return f"{receiver}.{call.method_name}({argument});"

    def _write_relational_accessors(self, writer: JavaWriter, m: RelationalMember) -> None:
        if m.is_many:
            self._write_collection_accessors(writer, m)
        else:
            self._write_single_accessors(writer, m)

    def _write_single_accessors(self, writer: JavaWriter, m: RelationalMember) -> None:
        type_name = self._member_type(m)
        field_ref = f"this.{m.name}"
        null = self.java.null_literal

        writer.blank()
        writer.start_block(f"public {type_name} {m.accessor(AccessorOp.GET)}()")
        writer.line(f"return {field_ref};")
        writer.end_block()

        writer.blank()
        writer.start_block(f"public {self.java.void_type} {m.accessor(AccessorOp.SET)}({type_name} newValue)")
        detach = self._call("oldValue", m.detach_call())
        attach = self._call("newValue", m.attach_call())
        if detach is None and attach is None:
            writer.line(f"{field_ref} = newValue;")
            writer.end_block()
            return
        writer.start_block(f"if ({field_ref} == newValue)")
        writer.line("return;")
        writer.end_block()
        writer.start_block(f"if ({field_ref} != {null})")
        writer.line(f"{type_name} oldValue = {field_ref};")
        writer.line(f"{field_ref} = {null};")
        writer.line(detach)
        writer.end_block()
        writer.line(f"{field_ref} = newValue;")
        writer.start_block(f"if (newValue != {null})")
        writer.line(attach)
        writer.end_block()
        writer.end_block()

    def _write_collection_accessors(self, writer: JavaWriter, m: RelationalMember) -> None:
        element_type = self.resolver.target_name(m.target)
        field_ref = f"this.{m.name}"
        null = self.java.null_literal

        writer.blank()
        writer.start_block(f"public {self._member_type(m)} {m.accessor(AccessorOp.GET)}()")
        writer.line(f"return {self.java.unmodifiable_view}({field_ref});")
        writer.end_block()

        writer.blank()
        writer.start_block(f"public {self.java.size_type} {m.accessor(AccessorOp.SIZE_OF)}()")
        writer.line(f"return {field_ref}.size();")
        writer.end_block()

        writer.blank()
        writer.start_block(f"public {self.java.void_type} {m.accessor(AccessorOp.ADD_TO)}({element_type} newValue)")
        writer.start_block(f"if (newValue == {null} || {field_ref}.contains(newValue))")
        writer.line("return;")
        writer.end_block()
        writer.line(f"{field_ref}.add(newValue);")
        attach = self._call("newValue", m.attach_call())
        if attach:
            writer.line(attach)
        writer.end_block()

        writer.blank()
        writer.start_block(f"public {self.java.void_type} {m.accessor(AccessorOp.REMOVE_FROM)}({element_type} oldValue)")
        writer.start_block(f"if (!{field_ref}.contains(oldValue))")
        writer.line("return;")
        writer.end_block()
        writer.line(f"{field_ref}.remove(oldValue);")
        detach = self._call("oldValue", m.detach_call())
        if detach:
            writer.line(detach)
        writer.end_block()

    def _write_class_operation(self, writer: JavaWriter, op: UmlOperation) -> None:
        visibility = self.java.visibility_keyword(op.visibility) if op.visibility else ""
        writer.blank()
        self._operation_javadoc(writer, op)
        if op.is_abstract:
            writer.line(f"{modifiers(visibility, 'abstract', self._signature(op))};")
            return
        writer.start_block(modifiers(visibility, "static" if op.is_static else "", self._signature(op)))
        if op.content:
            writer.write_statements(op.content)
        else:
            self._placeholder_body(writer)
        writer.end_block()

    # ---------- interfaces ----------
    def visit_interface(self, info: UmlInterface) -> str:
        own_package = self.resolver.qualified_name(info)
        imports: Set[str] = set()
        extends = self._super_names(info.super_interfaces, own_package, imports)
        for prop in info.properties:
            self._typed_imports(prop, own_package, imports)
        self._operation_imports(info.operations, own_package, imports)

        writer = self._new_writer(info)
        writer.write_imports(imports)
        header = f"public interface {info.name}"
        if extends:
            header += " extends " + ", ".join(extends)
        writer.start_block(header)

        for prop in info.properties:
            value = self.java.empty_constant_list if prop.is_many else self.java.null_literal
            writer.line(f"{self.resolver.rendered_type(prop)} {prop.name} = {value};")
        for op in info.operations:
            writer.blank()
            self._operation_javadoc(writer, op)
            if op.is_static:
                writer.start_block(f"static {self._signature(op)}")
                if op.content:
                    writer.write_statements(op.content)
                else:
                    self._placeholder_body(writer)
                writer.end_block()
            else:
                writer.line(f"{self._signature(op)};")

        writer.end_block()
        return writer.getvalue()

    # ---------- data types ----------
    def visit_datatype(self, info: UmlDataType) -> str:
        own_package = self.resolver.qualified_name(info)
        imports: Set[str] = set()
        for prop in info.properties:
            self._typed_imports(prop, own_package, imports)

        writer = self._new_writer(info)
        writer.write_imports(imports)
        components = ", ".join(f"{self.resolver.rendered_type(p)} {p.name}" for p in info.properties)
        writer.start_block(f"public record {info.name}({components})")
        writer.end_block()
        return writer.getvalue()

    # ---------- enumerations ----------
    def visit_enumeration(self, info: UmlEnumeration) -> str:
        writer = self._new_writer(info)
        writer.start_block(f"public enum {info.name}")
        for i, literal in enumerate(info.literals):
            writer.line(literal + ("," if i < len(info.literals) - 1 else ""))
        writer.end_block()
        return writer.getvalue()


class JavaGenerator:
    def __init__(self, model: UmlModel, config: Optional[GeneratorConfig] = None,
                 resolver: Optional[TypeResolver] = None) -> None:
        self.model = model
        self.config = config or DEFAULT_CONFIG
        self.resolver = resolver or TypeResolver(self.config.type_registry())
        self.synthesizer = AssociationSynthesizer(model)
        self.visitor = JavaSourceVisitor(self.resolver, self.synthesizer, indent=self.config.indent)

    def _visit_for(self, t: UmlType) -> Optional[Callable[[Any], str]]:
        visits: Dict[ElementKind, Callable[[Any], str]] = {
            ElementKind.CLASS: self.visitor.visit_class,
            ElementKind.INTERFACE: self.visitor.visit_interface,
            ElementKind.DATATYPE: self.visitor.visit_datatype,
        }
        if self.config.emit_enumerations:
            visits[ElementKind.ENUM] = self.visitor.visit_enumeration
        return visits.get(t.kind)

    def generates(self, t: UmlType) -> bool:
        return self._visit_for(t) is not None

    def generate_type(self, t: UmlType) -> Optional[SourceUnit]:
        visit = self._visit_for(t)
        if visit is None:
            return None
        text = visit(t)
        path_dir = self.resolver.package_path(t)
        file_name = t.name + DEFAULT_META.java.file_extension
        return SourceUnit(
            name=t.name,
            package=self.resolver.qualified_name(t),
            path=f"{path_dir}/{file_name}" if path_dir else file_name,
            text=text,
            element=t,
        )

    def generate(self) -> List[SourceUnit]:
        units: List[SourceUnit] = []
        for t in self.model.iter_types():
            unit = self.generate_type(t)
            if unit is not None:
                units.append(unit)
        logger.info(f"Generated {len(units)} Java compilation units")
        return units


__all__ = ["SourceUnit", "JavaElementVisitor", "JavaSourceVisitor", "JavaGenerator"]
