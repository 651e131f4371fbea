

from dataclasses import dataclass
from .java_meta import JavaMetaModel
from .plantuml_meta import PlantUmlMetaModel


@dataclass
class MetaBundle:
    java: JavaMetaModel
    plantuml: PlantUmlMetaModel


DEFAULT_META = MetaBundle(java=JavaMetaModel(), plantuml=PlantUmlMetaModel())
