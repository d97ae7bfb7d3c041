"""Debug-output calls that bypass the logging facility."""

import re
from typing import Iterator, Optional

from ...models import Severity, Violation, ViolationKind
from ..languages import LanguageRules
from ..models import Line
from .base import LineCheck


class BannedCallCheck(LineCheck):
    kind = ViolationKind.BANNED_CALL

    def __init__(self, rules: LanguageRules):
        self._calls = [(call, re.compile(call.pattern)) for call in rules.banned_calls]

    def check(
        self, line: Line, previous: Optional[Line], path: str, code: Optional[str] = None
    ) -> Iterator[Violation]:
        code = self._code(line, code)
        if not code.strip():
            return
        for call, pattern in self._calls:
            if pattern.search(code):
                yield self._violation(
                    Severity.ERROR, path, line.number, call.rule, call.message, call.hint
                )
