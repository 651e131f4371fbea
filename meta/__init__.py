

from .java_meta import JavaMetaModel, DEFAULT_PRIMITIVE_TYPES
from .plantuml_meta import PlantUmlMetaModel, VISIBILITY_GLYPHS, AGGREGATION_GLYPHS
from .default_model import DEFAULT_META, MetaBundle

__all__ = [
    "JavaMetaModel",
    "PlantUmlMetaModel",
    "DEFAULT_PRIMITIVE_TYPES",
    "VISIBILITY_GLYPHS",
    "AGGREGATION_GLYPHS",
    "MetaBundle",
    "DEFAULT_META",
]
