from dataclasses import dataclass
from typing import Dict

from uml_types import Visibility, AggregationType


VISIBILITY_GLYPHS: Dict[Visibility, str] = {
    Visibility.PUBLIC: "+",
    Visibility.PROTECTED: "#",
    Visibility.PRIVATE: "-",
    Visibility.PACKAGE: "~",
}

AGGREGATION_GLYPHS: Dict[AggregationType, str] = {
    AggregationType.NONE: "",
    AggregationType.SHARED: "o",
    AggregationType.COMPOSITE: "*",
}


@dataclass
class PlantUmlMetaModel:
    file_extension: str = ".puml"
    start: str = "@startuml"
    end: str = "@enduml"

    primitive_stereotype: str = "<<primitive>>"
    datatype_stereotype: str = "<<datatype>>"
    abstract_modifier: str = "{abstract}"
    static_modifier: str = "{static}"

    line: str = "--"
    generalization_arrow: str = "<|--"
    realization_arrow: str = "<|.."
    label_direction: str = ">"
    unbounded: str = "*"

    default_visibility: Visibility = Visibility.PACKAGE

    def visibility_glyph(self, visibility: Visibility) -> str:
        return VISIBILITY_GLYPHS[visibility]

    def aggregation_glyph(self, aggregation: AggregationType) -> str:
        return AGGREGATION_GLYPHS[aggregation]
