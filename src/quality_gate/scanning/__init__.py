"""Structural scanning of Java-family sources."""

from .checks import BannedCallCheck, HardcodedLiteralCheck, LineCheck, StyleSmellCheck
from .collector import ViolationCollector
from .docs import DocumentationAssociator
from .languages import LANGUAGES, LanguageRules, detect_language, rules_for
from .lexer import LexState, mask_literals, strip_non_code
from .lines import read_source_unit, source_unit_from_text
from .models import Line, MethodSpan, SourceUnit
from .scanner import ScanResult, SourceScanner
from .spans import MethodSpanDetector

__all__ = [
    "Line",
    "SourceUnit",
    "MethodSpan",
    "LexState",
    "strip_non_code",
    "mask_literals",
    "read_source_unit",
    "source_unit_from_text",
    "MethodSpanDetector",
    "DocumentationAssociator",
    "LineCheck",
    "BannedCallCheck",
    "HardcodedLiteralCheck",
    "StyleSmellCheck",
    "LANGUAGES",
    "LanguageRules",
    "detect_language",
    "rules_for",
    "ViolationCollector",
    "SourceScanner",
    "ScanResult",
]
