from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
import json
import logging
import os

import yaml

logger = logging.getLogger(__name__)


@dataclass
class TypeProfileRegistry:
    """Primitive-name mapping assembled from type profiles.

    A profile is a mapping with optional ``aliases`` (domain primitive name ->
    target type name) and ``imports`` (target type name -> fully qualified
    import). Later profiles override earlier ones.
    """
    aliases: Dict[str, str] = field(default_factory=dict)
    imports: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_profiles(cls, profiles: Optional[List[Dict[str, Any]]] = None) -> "TypeProfileRegistry":
        registry = cls()
        for prof in profiles or []:
            registry.merge_profile(prof)
        return registry

    def merge_profile(self, profile: Dict[str, Any]) -> None:
        self.aliases.update(profile.get("aliases", {}) or {})
        self.imports.update(profile.get("imports", {}) or {})

    def resolve(self, name: str) -> str:
        return self.aliases.get(name, name)

    def import_of(self, target_name: str) -> Optional[str]:
        return self.imports.get(target_name)


def _load_single_profile(path: str) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        if path.lower().endswith(('.yml', '.yaml')):
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Type profile must be a mapping: {path}")
    return data


def load_profiles(paths: List[str]) -> TypeProfileRegistry:
    profiles: List[Dict[str, Any]] = []
    for p in paths:
        if not p:
            continue
        if not os.path.isfile(p):
            raise FileNotFoundError(f"Type profile file not found: {p}")
        profiles.append(_load_single_profile(p))
        logger.debug(f"Loaded type profile {p}")
    return TypeProfileRegistry.from_profiles(profiles)


__all__ = ["TypeProfileRegistry", "load_profiles"]
