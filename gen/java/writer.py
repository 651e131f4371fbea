import logging
import textwrap
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)


class JavaWriter:
    """Line-oriented Java source writer with a stack of open blocks."""

    def __init__(self, indent: str = "    ") -> None:
        self.indent = indent
        self._lines: List[str] = []
        self._ctx_stack: List[str] = []

    def _prefix(self) -> str:
        return self.indent * len(self._ctx_stack)

    def line(self, text: str = "") -> None:
        self._lines.append(self._prefix() + text if text else "")

    def blank(self) -> None:
        """Add one empty line, never two in a row and never right after an opening brace."""
        if self._lines and self._lines[-1] != "" and not self._lines[-1].endswith("{"):
            self._lines.append("")

    def start_block(self, header: str) -> None:
        self.line(f"{header} {{")
        self._ctx_stack.append(header)

    def end_block(self) -> None:
        self._ctx_stack.pop()
        while self._lines and self._lines[-1] == "":
            self._lines.pop()
        self.line("}")

    def write_package(self, name: str) -> None:
        if name:
            self.line(f"package {name};")
            self.blank()

    def write_imports(self, imports: Iterable[str]) -> None:
        names = sorted(set(imports))
        for name in names:
            self.line(f"import {name};")
        if names:
            self.blank()

    def write_javadoc(self, text: Optional[str], tags: Iterable[str] = ()) -> None:
        body: List[str] = []
        if text:
            body.extend(text.strip().splitlines())
        tags = list(tags)
        if body and tags:
            body.append("")
        body.extend(tags)
        self.line("/**")
        for entry in body:
            self.line(f" * {entry}".rstrip())
        self.line(" */")

    def write_statements(self, content: str) -> None:
        """Splice a hand-written fragment into the current block."""
        fragment = textwrap.dedent(content.strip("\n"))
        for raw in fragment.splitlines():
            self.line(raw.rstrip())

    def end_doc(self) -> None:
        while self._ctx_stack:
            self.end_block()

    def getvalue(self) -> str:
        self.end_doc()
        return "\n".join(self._lines) + "\n"


def modifiers(*words: str) -> str:
    return " ".join(w for w in words if w)


__all__ = ["JavaWriter", "modifiers"]
