"""Data models shared by the structural checks and the gate report."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Severity(Enum):
    """Violation severity, ordered from most to least severe."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def at_least(self, other: "Severity") -> bool:
        """True when this severity is as severe as ``other`` or more."""
        return self.rank <= other.rank


_SEVERITY_RANK = {Severity.ERROR: 0, Severity.WARNING: 1, Severity.INFO: 2}


class ViolationKind(Enum):
    """Families of structural violations."""

    LONG_METHOD = "long_method"
    MISSING_DOC = "missing_doc"
    BANNED_CALL = "banned_call"
    HARDCODED_LITERAL = "hardcoded_literal"
    STYLE_SMELL = "style_smell"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


@dataclass(frozen=True)
class Violation:
    """One finding at one source location.

    ``rule`` is a stable identifier within the kind (``long-line``,
    ``system-out`` ...); ``hint`` is the remediation shown to the user.
    """

    kind: ViolationKind
    severity: Severity
    path: str
    line: int
    message: str
    rule: str = ""
    hint: Optional[str] = None

    @property
    def location(self) -> str:
        return f"{self.path}:{self.line}"

    @property
    def sort_key(self) -> tuple:
        return (self.path, self.line, self.kind.value, self.rule, self.message)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "path": self.path,
            "line": self.line,
            "rule": self.rule,
            "message": self.message,
            "hint": self.hint,
        }
