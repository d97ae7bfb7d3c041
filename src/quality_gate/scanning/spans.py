"""Method span detection by brace-depth tracking.

A span opens on a line that has the shape of a method or constructor
signature and whose signature ends in ``{`` or ``throws``. From there every
line adjusts the brace depth (comments and literals excluded) and the span
closes on the first line where the depth drops back to zero after having
gone positive. A body opened and closed on the declaration line is not a
reportable span. Nested classes and lambdas keep the depth positive, so they
stay inside the enclosing span.

A file with unbalanced braces may leave a span open at end of file; that
span is dropped without a violation.
"""

import re
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from ..logging_config import get_logger
from ..models import Severity, Violation, ViolationKind
from .lexer import LexState, strip_non_code
from .models import Line, MethodSpan, SourceUnit

logger = get_logger(__name__)

_METHOD_OPENING = re.compile(r"\)\s*(?:\{|throws\b)")

# Lines after the declaration line that may still belong to its signature
_SIGNATURE_LOOKAHEAD = 3


def confirms_method_opening(lines: Sequence[Line], index: int) -> bool:
    """True when the signature starting at ``lines[index]`` opens a body.

    The signature may wrap over a few lines (parameters, ``throws`` clause,
    brace on its own line). A ``;`` ends it without a body (abstract and
    interface methods, calls).
    """
    parts: list[str] = []
    for line in lines[index : index + 1 + _SIGNATURE_LOOKAHEAD]:
        code = line.code
        parts.append(code)
        if _METHOD_OPENING.search(" ".join(parts)):
            return True
        if ";" in code or "{" in code:
            return False
    return False


@dataclass
class _OpenSpan:
    name: str
    start_line: int
    depth: int = 0
    line_count: int = 0
    went_positive: bool = False
    trace: list[int] = field(default_factory=list)

    def close(self) -> MethodSpan:
        return MethodSpan(
            name=self.name,
            start_line=self.start_line,
            line_count=self.line_count,
            depth_trace=tuple(self.trace),
        )


class MethodSpanDetector:
    """Finds method bodies and flags the ones longer than ``max_lines``."""

    def __init__(self, max_lines: int = 30):
        self.max_lines = max_lines

    def spans(self, unit: SourceUnit) -> Iterator[MethodSpan]:
        """Yield every closed span of more than one line, in file order."""
        lines = unit.lines
        state = LexState.CODE
        span = None

        for index, line in enumerate(lines):
            outside_code = state is not LexState.CODE
            code, state = strip_non_code(line.text, state)

            if span is None:
                if outside_code or not line.is_declaration_candidate:
                    continue
                if not confirms_method_opening(lines, index):
                    continue
                span = _OpenSpan(name=line.declared_name or "<anonymous>", start_line=line.number)

            opens = code.count("{")
            span.depth += opens - code.count("}")
            span.line_count += 1
            span.trace.append(span.depth)
            if opens > 0 or span.depth > 0:
                span.went_positive = True

            if span.went_positive and span.depth <= 0:
                if span.line_count > 1:
                    yield span.close()
                span = None

        if span is not None:
            logger.debug(
                f"{unit.path}:{span.start_line}: unterminated body of '{span.name}' discarded"
            )

    def detect(self, unit: SourceUnit) -> list[Violation]:
        violations = []
        for span in self.spans(unit):
            if span.line_count > self.max_lines:
                violations.append(
                    Violation(
                        kind=ViolationKind.LONG_METHOD,
                        severity=Severity.ERROR,
                        path=unit.path,
                        line=span.start_line,
                        message=(
                            f"Method '{span.name}' is {span.line_count} lines "
                            f"(max: {self.max_lines})."
                        ),
                        rule="long-method",
                        hint="Refactor into smaller methods.",
                    )
                )
        return violations
