"""Pattern checks: independent single-pass detectors over the lines of a file."""

from typing import Iterable

from ...config import GateConfig
from ...models import Violation
from ..languages import LANGUAGES, LanguageRules
from ..lexer import LexState, mask_literals
from ..models import SourceUnit
from .banned_calls import BannedCallCheck
from .base import LineCheck
from .literals import HardcodedLiteralCheck
from .style import StyleSmellCheck


def build_checks(config: GateConfig, rules: LanguageRules) -> list[LineCheck]:
    """Instantiate every line check for one language."""
    return [
        BannedCallCheck(rules),
        HardcodedLiteralCheck(rules),
        StyleSmellCheck(
            max_line_length=config.max_line_length,
            disallowed_indent=config.disallowed_indent,
        ),
    ]


def build_language_checks(config: GateConfig) -> dict[str, list[LineCheck]]:
    """Line checks for every known language, keyed by language name."""
    return {name: build_checks(config, rules) for name, rules in LANGUAGES.items()}


def code_views(unit: SourceUnit) -> list[str]:
    """Masked code of each line, block comments and text blocks tracked across lines."""
    views = []
    state = LexState.CODE
    for line in unit:
        code, state = mask_literals(line.text, state)
        views.append(code)
    return views


def run_checks(unit: SourceUnit, checks: Iterable[LineCheck]) -> list[Violation]:
    """Run every check over ``unit``, one pass per check."""
    violations: list[Violation] = []
    views = code_views(unit)
    for check in checks:
        previous = None
        for line, code in zip(unit, views):
            violations.extend(check.check(line, previous, unit.path, code))
            previous = line
        violations.extend(check.check_unit(unit))
    return violations


__all__ = [
    "LineCheck",
    "BannedCallCheck",
    "HardcodedLiteralCheck",
    "StyleSmellCheck",
    "build_checks",
    "build_language_checks",
    "code_views",
    "run_checks",
]
