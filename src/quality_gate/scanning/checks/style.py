"""Formatting and style smells.

Only ``long-line``, ``wildcard-import``, ``tab-indent`` and ``empty-catch``
are warnings; the rest are informational and never fail the default gate.
"""

import re
from typing import Iterator, Optional

from ...models import Severity, Violation, ViolationKind
from ..models import Line, SourceUnit
from .base import LineCheck

_WILDCARD_IMPORT = re.compile(r"^\s*import\s+(?:static\s+)?[\w.]+\.\*\s*;")
_EMPTY_CATCH = re.compile(r"\bcatch\s*\([^)]*\)\s*\{\s*\}")
_TODO_MARKER = re.compile(r"(?://|/\*|^\s*\*)\s*(TODO|FIXME|HACK|XXX)\b")


class StyleSmellCheck(LineCheck):
    kind = ViolationKind.STYLE_SMELL

    def __init__(self, max_line_length: int = 120, disallowed_indent: str = "\t"):
        self.max_line_length = max_line_length
        self.disallowed_indent = disallowed_indent

    def check(
        self, line: Line, previous: Optional[Line], path: str, code: Optional[str] = None
    ) -> Iterator[Violation]:
        text = line.text
        code = self._code(line, code)
        n = line.number

        if len(text) > self.max_line_length:
            yield self._violation(
                Severity.WARNING, path, n, "long-line",
                f"Line is {len(text)} characters (max: {self.max_line_length}).",
                "Break the line up.",
            )

        if _WILDCARD_IMPORT.match(code):
            yield self._violation(
                Severity.WARNING, path, n, "wildcard-import",
                "Wildcard import.",
                "Import the classes explicitly.",
            )

        if self.disallowed_indent and self.disallowed_indent in line.indentation:
            yield self._violation(
                Severity.WARNING, path, n, "tab-indent",
                f"Indentation contains {self.disallowed_indent!r}.",
                "Indent with spaces.",
            )

        if _EMPTY_CATCH.search(code):
            yield self._violation(
                Severity.WARNING, path, n, "empty-catch",
                "Empty catch block.",
                "Log or rethrow the exception.",
            )

        if line.is_blank and previous is not None and previous.is_blank:
            yield self._violation(
                Severity.INFO, path, n, "blank-lines",
                "Multiple consecutive blank lines.",
            )
        elif text != text.rstrip():
            yield self._violation(
                Severity.INFO, path, n, "trailing-whitespace",
                "Trailing whitespace.",
            )

        marker = _TODO_MARKER.search(text)
        if marker:
            yield self._violation(
                Severity.INFO, path, n, "todo-marker",
                f"{marker.group(1)} marker.",
                "Track the work in an issue instead.",
            )

    def check_unit(self, unit: SourceUnit) -> Iterator[Violation]:
        if len(unit) and not unit.ends_with_newline:
            yield self._violation(
                Severity.INFO, unit.path, len(unit), "final-newline",
                "File does not end with a newline.",
            )
