from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, List

from meta import DEFAULT_PRIMITIVE_TYPES
from types_profiles.registry import TypeProfileRegistry, load_profiles


@dataclass
class GeneratorConfig:
    # Core settings
    project_name: str = "GeneratedModel"
    diagram_base_name: str = "diagram"         # diagram documents are named <base>_<package>
    indent: str = "    "

    # Type mapping
    primitive_types: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PRIMITIVE_TYPES))
    types_profiles: Optional[List[str]] = None  # JSON/YAML files extending primitive_types

    # Processing settings
    strict_validation: bool = False            # If true, raise when validation reports errors
    report_unresolved_references: bool = True
    emit_enumerations: bool = True

    def type_registry(self) -> TypeProfileRegistry:
        """Registry combining ``primitive_types`` with the configured profiles."""
        registry = TypeProfileRegistry(aliases=dict(self.primitive_types))
        if self.types_profiles:
            loaded = load_profiles(self.types_profiles)
            registry.aliases.update(loaded.aliases)
            registry.imports.update(loaded.imports)
        return registry


DEFAULT_CONFIG = GeneratorConfig()

__all__ = [
    "GeneratorConfig",
    "DEFAULT_CONFIG",
]
