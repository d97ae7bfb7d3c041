"""Base class for line checks."""

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from ...models import Severity, Violation, ViolationKind
from ..lexer import mask_literals
from ..models import Line, SourceUnit


class LineCheck(ABC):
    """A single-pass check over the lines of one source unit.

    Checks are independent of each other and may run in any order. Each
    call to ``check`` sees one line, the line before it and the line's code
    view: comments removed and every non-empty literal masked to ``"_"``.
    ``run_checks`` carries block-comment state into that view; a check
    called without one masks the line on its own and treats a line that
    starts with a comment token as all comment. ``check_unit`` is the
    hook for whole-file properties.
    """

    kind: ViolationKind

    @abstractmethod
    def check(
        self, line: Line, previous: Optional[Line], path: str, code: Optional[str] = None
    ) -> Iterator[Violation]:
        ...

    def check_unit(self, unit: SourceUnit) -> Iterator[Violation]:
        return iter(())

    @staticmethod
    def _code(line: Line, code: Optional[str]) -> str:
        if code is not None:
            return code
        return "" if line.is_comment else mask_literals(line.text)[0]

    def _violation(
        self,
        severity: Severity,
        path: str,
        line: int,
        rule: str,
        message: str,
        hint: Optional[str] = None,
    ) -> Violation:
        return Violation(
            kind=self.kind,
            severity=severity,
            path=path,
            line=line,
            message=message,
            rule=rule,
            hint=hint,
        )
