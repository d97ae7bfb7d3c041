"""Language rules: the per-language knobs of the line checks.

Adding a language:
  1. Add a LanguageRules entry to LANGUAGES below.
  2. Add its extension to ``include_extensions`` in the config.

Unknown extensions fall back to the Java rules; every supported language is
brace-delimited and C-commented, so the span and documentation detectors
are shared.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class BannedCall:
    """A debug-output call that must go through the logging facility instead."""

    rule: str
    pattern: str
    message: str
    hint: str


@dataclass(frozen=True)
class LanguageRules:
    """Everything the line checks need to know about a language."""

    name: str
    extensions: list[str]
    banned_calls: list[BannedCall] = field(default_factory=list)
    # Methods that compare by value, e.g. ``.equals("x")``
    equality_methods: tuple[str, ...] = ("equals", "equalsIgnoreCase")


_SLF4J_HINT = "Use an SLF4J Logger (private static final Logger LOGGER = LoggerFactory.getLogger(...))."

_JAVA_BANNED = [
    BannedCall(
        rule="system-out",
        pattern=r"\bSystem\.(?:out|err)\.(?:println|print|printf)\b",
        message="System.out/err usage detected.",
        hint=_SLF4J_HINT,
    ),
    BannedCall(
        rule="print-stack-trace",
        pattern=r"\.printStackTrace\s*\(\s*\)",
        message="printStackTrace() detected.",
        hint='Log the exception instead: LOGGER.error("message", exception).',
    ),
]


LANGUAGES: dict[str, LanguageRules] = {
    "java": LanguageRules(
        name="java",
        extensions=[".java"],
        banned_calls=_JAVA_BANNED,
    ),
    "groovy": LanguageRules(
        name="groovy",
        extensions=[".groovy"],
        banned_calls=_JAVA_BANNED
        + [
            BannedCall(
                rule="groovy-println",
                pattern=r"(?:^|[;{]\s*)\s*println\b",
                message="println usage detected.",
                hint=_SLF4J_HINT,
            ),
        ],
    ),
}


_EXTENSION_TO_LANGUAGE: dict[str, str] = {}
for _lang_name, _rules in LANGUAGES.items():
    for _ext in _rules.extensions:
        _EXTENSION_TO_LANGUAGE[_ext] = _lang_name


def detect_language(filepath: Union[str, Path]) -> str:
    """Language name for a file, ``"java"`` when the extension is unknown."""
    return _EXTENSION_TO_LANGUAGE.get(Path(filepath).suffix.lower(), "java")


def rules_for(filepath: Union[str, Path]) -> LanguageRules:
    return LANGUAGES[detect_language(filepath)]
