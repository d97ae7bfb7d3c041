"""Documentation association for public declarations.

A declaration is documented when a Javadoc block closes just above it. The
lookback from the declaration is a bounded rule, not a proximity guess:

- annotation lines are skipped and do not count against the window;
- blank lines are skipped, at most ``window`` of them;
- a line ending in ``*/`` succeeds if its comment block opens with ``/**``;
- any other line stops the scan and the declaration is undocumented;
- no more than ``scan_limit`` lines are examined in total.
"""

import re
from typing import Iterable, Optional, Sequence

from ..logging_config import get_logger
from ..models import Severity, Violation, ViolationKind
from .lexer import LexState, strip_non_code
from .models import Line, SourceUnit

logger = get_logger(__name__)


def start_states(lines: Sequence[Line]) -> list[LexState]:
    """Lexical mode at the start of each line."""
    states = []
    state = LexState.CODE
    for line in lines:
        states.append(state)
        _, state = strip_non_code(line.text, state)
    return states


def _last_opener(text: str) -> str:
    """Text of the comment left open at the end of ``text``, from its ``/*``."""
    closed = text.rfind("*/")
    start = text.find("/*", closed + 2 if closed != -1 else 0)
    return text[start:] if start != -1 else ""


def _closes_doc_block(lines: Sequence[Line], index: int, states: Sequence[LexState]) -> bool:
    """Whether the comment closing on ``lines[index]`` opened with ``/**``.

    The comment opened on the nearest line at or above ``index`` that starts
    in code; every line after it starts inside the comment. A ``/*`` in a
    body line (``src/*.java``) is therefore never taken for the opener.
    """
    k = index
    while k > 0 and states[k] is not LexState.CODE:
        k -= 1
    text = lines[k].text
    if k == index:
        text = text[: text.rfind("*/")]
    return _last_opener(text).startswith("/**")


class DocumentationAssociator:
    """Flags public declarations without an associated Javadoc block."""

    def __init__(
        self, window: int = 5, scan_limit: int = 50, exempt_patterns: Iterable[str] = ()
    ):
        self.window = window
        self.scan_limit = scan_limit
        self._exempt = [re.compile(p) for p in exempt_patterns]

    def find_documentation(
        self, unit: SourceUnit, index: int, states: Optional[Sequence[LexState]] = None
    ) -> Optional[int]:
        """Line number where the documentation of ``unit.lines[index]`` closes.

        Args:
            unit: Source being checked
            index: 0-based index of the declaration line
            states: ``start_states(unit.lines)``, computed when not given

        Returns:
            The 1-based line number, or None when the declaration is undocumented
        """
        lines = unit.lines
        if states is None:
            states = start_states(lines)
        blanks = 0
        examined = 0
        j = index - 1

        while j >= 0 and examined < self.scan_limit:
            line = lines[j]
            examined += 1

            if line.is_annotation:
                j -= 1
                continue
            if line.is_blank:
                blanks += 1
                if blanks > self.window:
                    return None
                j -= 1
                continue
            if line.closes_comment and _closes_doc_block(lines, j, states):
                return line.number
            return None

        return None

    def is_exempt(self, name: str) -> bool:
        return any(p.fullmatch(name) for p in self._exempt)

    def check(self, unit: SourceUnit) -> list[Violation]:
        violations = []
        states = start_states(unit.lines)

        for index, line in enumerate(unit.lines):
            if states[index] is not LexState.CODE or not line.is_public_declaration:
                continue

            name = line.declared_name or "<anonymous>"
            if self.is_exempt(name):
                logger.debug(f"{unit.path}:{line.number}: '{name}' exempt from documentation")
                continue

            if self.find_documentation(unit, index, states) is None:
                violations.append(
                    Violation(
                        kind=ViolationKind.MISSING_DOC,
                        severity=Severity.ERROR,
                        path=unit.path,
                        line=line.number,
                        message=f"Missing Javadoc on public method '{name}'.",
                        rule="missing-doc",
                        hint="Add a /** ... */ block directly above the declaration.",
                    )
                )
        return violations
