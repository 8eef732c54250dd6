from __future__ import annotations

from typing import Any

from .errors import BindgenError


class Printer:
    """Text buffer with indentation tracking.

    Indentation is applied at the start of every line written through
    ``printf``; blank lines are left unindented.
    """

    def __init__(self, indent_str: str = "\t") -> None:
        self.indent_str = indent_str
        self.indent_level = 0
        self._chunks: list[str] = []
        self._at_line_start = True

    def indent(self) -> None:
        self.indent_level += 1

    def outdent(self) -> None:
        if self.indent_level == 0:
            raise BindgenError("printer outdent below zero")
        self.indent_level -= 1

    def printf(self, fmt: str, *args: Any) -> None:
        text = fmt % args if args else fmt
        for line in text.splitlines(keepends=True):
            if self._at_line_start and line not in ("\n", ""):
                self._chunks.append(self.indent_str * self.indent_level)
            self._chunks.append(line)
            self._at_line_start = line.endswith("\n")

    def getvalue(self) -> str:
        return "".join(self._chunks)
