from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

from core.uml_model import UmlModel, UmlType, UmlClass, UmlInterface


@dataclass(frozen=True)
class CycleFinding:
    node: UmlType
    field: str   # name of the super-reference list on ``node``
    index: int   # direct super reference through which ``node`` reaches itself


class InheritanceGraph:
    """Directed graph over super-type references.

    Edges are looked up through references, never through ownership, so the
    graph may contain cycles; unresolved references are leaves.
    """

    def __init__(self, nodes: Iterable[UmlType], field: str) -> None:
        self.nodes: List[UmlType] = list(nodes)
        self.field = field

    def direct_supers(self, node: UmlType) -> List[Optional[UmlType]]:
        return [ref.ref for ref in getattr(node, self.field, [])]

    def cycle_entry(self, node: UmlType) -> Optional[int]:
        """Index of the first direct super reference leading back to ``node``.

        Worklist traversal with a visited set; returns ``None`` when ``node``
        is not on a cycle. Diamonds and nodes that merely reach a cycle
        elsewhere are not reported.
        """
        todo: List[Tuple[Optional[UmlType], int]] = [
            (target, i) for i, target in enumerate(self.direct_supers(node))
        ]
        todo.reverse()
        seen: Set[int] = set()
        while todo:
            target, origin = todo.pop()
            if target is None:
                continue
            if target is node:
                return origin
            if id(target) in seen:
                continue
            seen.add(id(target))
            todo.extend(reversed([(t, origin) for t in self.direct_supers(target)]))
        return None

    def find_cycles(self) -> List[CycleFinding]:
        findings: List[CycleFinding] = []
        for node in self.nodes:
            idx = self.cycle_entry(node)
            if idx is not None:
                findings.append(CycleFinding(node=node, field=self.field, index=idx))
        return findings


def class_graph(model: UmlModel) -> InheritanceGraph:
    return InheritanceGraph(model.types_of_kind(UmlClass), "super_classes")


def interface_graph(model: UmlModel) -> InheritanceGraph:
    return InheritanceGraph(model.types_of_kind(UmlInterface), "super_interfaces")


__all__ = ["CycleFinding", "InheritanceGraph", "class_graph", "interface_graph"]
