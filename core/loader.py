#!/usr/bin/env python3
"""
Build a ``UmlModel`` from a JSON or YAML document.

Document layout::

    packages:
      - name: de
        packages: [...]
        types:
          - {kind: class, name: Test, superClasses: [Base], properties: [...]}

Type references are kept by name and resolved lazily against the model.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

import orjson
import yaml

from core.errors import ModelLoadError
from core.uml_model import (
    Reference, UmlAssociation, UmlClass, UmlDataType, UmlEnumeration,
    UmlInterface, UmlModel, UmlOperation, UmlPackage, UmlParameter,
    UmlPrimitiveType, UmlProperty, UmlType
)
from uml_types import AggregationType, UNBOUNDED, Visibility

logger = logging.getLogger(__name__)

_MULTIPLICITY_RE = re.compile(r"^\s*(\d+|\*)\s*(?:\.\.\s*(\d+|\*)\s*)?$")

KIND_ALIASES: Dict[str, str] = {
    "class": "class",
    "interface": "interface",
    "datatype": "datatype",
    "dt": "datatype",
    "primitive": "primitive",
    "pt": "primitive",
    "enumeration": "enumeration",
    "enum": "enumeration",
    "association": "association",
}


def _bound(text: str, path: str = "") -> int:
    if text == "*":
        return UNBOUNDED
    if not text.isdigit():
        raise ModelLoadError(f"Invalid bound '{text}'", path)
    return int(text)


def parse_multiplicity(text: Any, path: str = "") -> Tuple[int, int]:
    """``"1"`` -> (1, 1), ``"*"`` -> (0, *), ``"0..1"``, ``"1..*"``."""
    if isinstance(text, int) and not isinstance(text, bool):
        return text, text
    m = _MULTIPLICITY_RE.match(str(text))
    if m is None:
        raise ModelLoadError(f"Invalid multiplicity '{text}'", path)
    first, second = m.group(1), m.group(2)
    if second is None:
        if first == "*":
            return 0, UNBOUNDED
        return int(first), int(first)
    if first == "*":
        raise ModelLoadError(f"Lower bound cannot be unbounded in '{text}'", path)
    return int(first), _bound(second, path)


def _mapping(node: Any, path: str) -> Dict[str, Any]:
    if not isinstance(node, dict):
        raise ModelLoadError(f"Expected a mapping, got {type(node).__name__}", path)
    return node


def _sequence(node: Dict[str, Any], key: str, path: str) -> List[Any]:
    value = node.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ModelLoadError(f"'{key}' must be a list", path)
    return value


def _name(node: Dict[str, Any], path: str) -> str:
    name = node.get("name")
    if not isinstance(name, str) or not name:
        raise ModelLoadError("Missing 'name'", path)
    return name


def _reference(value: Any, path: str) -> Optional[Reference]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ModelLoadError(f"Type reference must be a string, got {type(value).__name__}", path)
    return Reference(value)


def _visibility(value: Any, path: str) -> Optional[Visibility]:
    if value is None:
        return None
    try:
        return Visibility(str(value).lower())
    except ValueError:
        raise ModelLoadError(f"Unknown visibility '{value}'", path) from None


def _aggregation(value: Any, path: str) -> AggregationType:
    if value is None:
        return AggregationType.NONE
    try:
        return AggregationType(str(value).lower())
    except ValueError:
        raise ModelLoadError(f"Unknown aggregation '{value}'", path) from None


def _bounds(node: Dict[str, Any], path: str) -> Tuple[int, int]:
    if "multiplicity" in node:
        return parse_multiplicity(node["multiplicity"], path)
    lower = node.get("lower", 1)
    upper = node.get("upper", 1)
    if isinstance(upper, str):
        upper = _bound(upper.strip(), path)
    if not isinstance(lower, int) or not isinstance(upper, int):
        raise ModelLoadError("'lower' and 'upper' must be integers", path)
    return lower, upper


def _property(node: Any, path: str) -> UmlProperty:
    node = _mapping(node, path)
    lower, upper = _bounds(node, path)
    return UmlProperty(
        name=_name(node, path),
        type=_reference(node.get("type"), path),
        lower=lower,
        upper=upper,
        visibility=_visibility(node.get("visibility"), path),
        is_static=bool(node.get("static", False)),
        aggregation=_aggregation(node.get("aggregation"), path),
    )


def _parameter(node: Any, path: str) -> UmlParameter:
    node = _mapping(node, path)
    return UmlParameter(name=_name(node, path), type=_reference(node.get("type"), path))


def _operation(node: Any, path: str) -> UmlOperation:
    node = _mapping(node, path)
    name = _name(node, path)
    lower, upper = _bounds(node, path)
    return UmlOperation(
        name=name,
        type=_reference(node.get("type"), path),
        lower=lower,
        upper=upper,
        parameters=[_parameter(p, f"{path}/{name}") for p in _sequence(node, "params", path)],
        visibility=_visibility(node.get("visibility"), path),
        is_static=bool(node.get("static", False)),
        is_abstract=bool(node.get("abstract", False)),
        description=node.get("description"),
        content=node.get("content"),
    )


def _references(node: Dict[str, Any], key: str, path: str) -> List[Reference]:
    refs: List[Reference] = []
    for v in _sequence(node, key, path):
        if v is None:
            raise ModelLoadError(f"Empty entry in '{key}'", path)
        refs.append(_reference(v, path))
    return refs


def _type(node: Any, path: str) -> UmlType:
    node = _mapping(node, path)
    name = _name(node, path)
    here = f"{path}/{name}"
    raw_kind = str(node.get("kind", "")).lower()
    kind = KIND_ALIASES.get(raw_kind)
    if kind is None:
        raise ModelLoadError(f"Unknown type kind '{node.get('kind')}'", here)

    props = [_property(p, here) for p in _sequence(node, "properties", here)]
    ops = [_operation(o, here) for o in _sequence(node, "operations", here)]
    if kind == "class":
        return UmlClass(
            name=name,
            is_abstract=bool(node.get("abstract", False)),
            properties=props,
            operations=ops,
            super_classes=_references(node, "superClasses", here),
            super_interfaces=_references(node, "superInterfaces", here),
        )
    if kind == "interface":
        return UmlInterface(
            name=name,
            properties=props,
            operations=ops,
            super_interfaces=_references(node, "superInterfaces", here),
        )
    if kind == "datatype":
        return UmlDataType(name=name, properties=props)
    if kind == "primitive":
        return UmlPrimitiveType(name=name)
    if kind == "enumeration":
        return UmlEnumeration(name=name, literals=[str(v) for v in _sequence(node, "literals", here)])
    return UmlAssociation(name=name, ends=[_property(e, here) for e in _sequence(node, "ends", here)])


def _package(node: Any, path: str) -> UmlPackage:
    node = _mapping(node, path)
    name = _name(node, path)
    here = f"{path}/{name}" if path else name
    return UmlPackage(
        name=name,
        packages=[_package(p, here) for p in _sequence(node, "packages", here)],
        types=[_type(t, here) for t in _sequence(node, "types", here)],
    )


def load_model(data: Any) -> UmlModel:
    """Build and link a model from an already parsed document."""
    root = _mapping(data, "")
    model = UmlModel(packages=[_package(p, "") for p in _sequence(root, "packages", "")])
    logger.info(
        f"Loaded model: {sum(1 for _ in model.iter_packages())} packages, "
        f"{sum(1 for _ in model.iter_types())} types"
    )
    return model


def loads_model(text: str, fmt: str = "json") -> UmlModel:
    fmt = fmt.lower()
    try:
        if fmt == "json":
            data = orjson.loads(text)
        elif fmt in ("yaml", "yml"):
            data = yaml.safe_load(text)
        else:
            raise ModelLoadError(f"Unsupported document format '{fmt}'")
    except (orjson.JSONDecodeError, yaml.YAMLError) as e:
        raise ModelLoadError(f"Malformed {fmt} document: {e}") from e
    return load_model(data)


def load_model_file(path: str) -> UmlModel:
    fmt = "yaml" if path.lower().endswith((".yml", ".yaml")) else "json"
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    try:
        return loads_model(text, fmt)
    except ModelLoadError as e:
        raise ModelLoadError(str(e), path) from e


__all__ = ["load_model", "loads_model", "load_model_file", "parse_multiplicity", "KIND_ALIASES"]
