"""Comparisons against hardcoded string literals.

Patterns run on the masked code view, where each non-empty string literal
is the single token ``"_"`` and an empty one is ``""``. Text inside a
literal (``"size == "``) can therefore never look like a comparison.
"""

import re
from typing import Iterator, Optional

from ...models import Severity, Violation, ViolationKind
from ..languages import LanguageRules
from ..models import Line
from .base import LineCheck

_CONSTANT_DECLARATION = re.compile(r"\bstatic\s+final\b|\bfinal\s+static\b")
_IMPORT = re.compile(r"^\s*import\s")
_LITERAL = r'"_?"'
_FILLED_LITERAL = r'"_"'


class HardcodedLiteralCheck(LineCheck):
    """``x.equals("a")``, ``"a".equals(x)`` and ``== "a"`` comparisons.

    Constant declarations, imports and comments are skipped. Each pattern
    that matches yields its own violation.
    """

    kind = ViolationKind.HARDCODED_LITERAL

    def __init__(self, rules: LanguageRules):
        methods = "|".join(re.escape(m) for m in rules.equality_methods)
        self._patterns = [
            (
                "literal-argument",
                re.compile(rf"\.(?:{methods})\s*\(\s*{_FILLED_LITERAL}\s*\)"),
                "Hardcoded string in equality comparison.",
                "Compare against a named constant instead.",
            ),
            (
                "literal-receiver",
                re.compile(rf"{_FILLED_LITERAL}\s*\.(?:{methods})\s*\("),
                'Hardcoded string in comparison ("literal".equals(...)).',
                "Compare against a named constant instead.",
            ),
            (
                "literal-reference-equality",
                re.compile(rf"[=!]=\s*{_LITERAL}|{_LITERAL}\s*[=!]="),
                "String compared by reference ('=='/'!=') against a literal.",
                "Use .equals() with a named constant.",
            ),
        ]

    def check(
        self, line: Line, previous: Optional[Line], path: str, code: Optional[str] = None
    ) -> Iterator[Violation]:
        code = self._code(line, code)
        if not code.strip() or _IMPORT.match(code) or _CONSTANT_DECLARATION.search(code):
            return
        for rule, pattern, message, hint in self._patterns:
            if pattern.search(code):
                yield self._violation(Severity.WARNING, path, line.number, rule, message, hint)
