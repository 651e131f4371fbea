from dataclasses import dataclass, field
from typing import Dict

from uml_types import TypeName, Visibility

# Domain primitive name -> Java type name
DEFAULT_PRIMITIVE_TYPES: Dict[str, TypeName] = {
    "Decimal": "Double",
    "String": "String",
    "Boolean": "Boolean",
    "Integer": "Integer",
}


@dataclass
class JavaMetaModel:
    file_extension: str = ".java"
    package_separator: str = "."
    path_separator: str = "/"

    list_type: TypeName = "List"
    list_impl_type: TypeName = "ArrayList"
    list_import: str = "java.util.List"
    list_impl_import: str = "java.util.ArrayList"
    collections_import: str = "java.util.Collections"
    unmodifiable_view: str = "Collections.unmodifiableList"
    empty_constant_list: str = "List.of()"

    void_type: TypeName = "void"
    null_literal: str = "null"
    self_literal: str = "this"
    size_type: TypeName = "int"
    unimplemented_exception: str = "UnsupportedOperationException"

    generated_tag: str = "@generated"
    modified_tag: str = "@generated NOT"

    primitive_types: Dict[str, TypeName] = field(default_factory=lambda: dict(DEFAULT_PRIMITIVE_TYPES))

    def visibility_keyword(self, visibility: Visibility) -> str:
        """Java modifier for a visibility; package visibility has no keyword."""
        mapping: Dict[Visibility, str] = {
            Visibility.PUBLIC: "public",
            Visibility.PROTECTED: "protected",
            Visibility.PRIVATE: "private",
            Visibility.PACKAGE: "",
        }
        return mapping[visibility]

    def list_of(self, element_type: TypeName) -> TypeName:
        return f"{self.list_type}<{element_type}>"
