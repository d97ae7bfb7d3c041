"""Data models for the scanning layer.

``Line`` predicates are pure functions of the line text. Anything that needs
context from surrounding lines (block comment state, brace depth) is tracked
by the detectors that walk a ``SourceUnit``.
"""

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from .lexer import strip_non_code

_ANNOTATION = re.compile(r"^\s*@(?!interface\b)[\w.$]+")
_LEADING_ANNOTATIONS = re.compile(r"^\s*(?:@(?!interface\b)[\w.$]+(?:\([^()]*\))?\s+)+")

# modifiers + optional type parameters + return type + identifier + "("
_DECLARATION = re.compile(
    r"^\s*(?:(?:public|protected|private|static|final|abstract|synchronized|native"
    r"|default|strictfp|transient|override)\s+)*"
    r"(?:<[^()]*>\s+)?"
    r"(?P<type>[\w.$]+(?:<[^()]*>)?(?:\[\])*)\s+"
    r"(?P<name>[\w$]+)\s*\("
)
_CONTROL_START = re.compile(
    r"^\s*(?:if|for|while|switch|catch|new|return|else|do|try|throw|synchronized|case)\b"
)
_NOT_A_RETURN_TYPE = frozenset(
    {"class", "interface", "enum", "record", "new", "return", "throw", "else", "import", "package"}
)
_PUBLIC_MEMBER = re.compile(
    r"^\s*public\s+(?!class\b|interface\b|enum\b|record\b|@interface\b|static\s+final\b)"
)


@dataclass(frozen=True)
class Line:
    """One physical source line (1-based), line terminator removed."""

    number: int
    text: str

    @property
    def stripped(self) -> str:
        return self.text.strip()

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    @property
    def is_comment(self) -> bool:
        """Line starts with a comment token (``//``, ``/*`` or a ``*`` continuation)."""
        return self.stripped.startswith(("//", "/*", "*"))

    @property
    def opens_comment(self) -> bool:
        return self.stripped.startswith("/*")

    @property
    def closes_comment(self) -> bool:
        return self.stripped.endswith("*/")

    @property
    def is_annotation(self) -> bool:
        return bool(_ANNOTATION.match(self.text))

    @property
    def code(self) -> str:
        """Text with comments removed and literals emptied (single-line view)."""
        return strip_non_code(self.text)[0]

    @property
    def open_braces(self) -> int:
        return self.code.count("{")

    @property
    def close_braces(self) -> int:
        return self.code.count("}")

    @property
    def indentation(self) -> str:
        return self.text[: len(self.text) - len(self.text.lstrip())]

    def _declaration(self) -> Optional[re.Match]:
        if self.is_comment or _CONTROL_START.match(self.text):
            return None
        text = _LEADING_ANNOTATIONS.sub("", self.text)
        if _CONTROL_START.match(text):
            return None
        match = _DECLARATION.match(text)
        if match is None or match.group("type") in _NOT_A_RETURN_TYPE:
            return None
        return match

    @property
    def is_declaration_candidate(self) -> bool:
        """Line has the shape of a method or constructor signature.

        Whether it really opens a body is decided by looking at the
        signature's end (see ``spans.confirms_method_opening``).
        """
        return self._declaration() is not None

    @property
    def is_public_declaration(self) -> bool:
        """A ``public`` method or constructor declaration (not a type or constant)."""
        text = _LEADING_ANNOTATIONS.sub("", self.text)
        return bool(_PUBLIC_MEMBER.match(text)) and self.is_declaration_candidate

    @property
    def declared_name(self) -> Optional[str]:
        """Identifier before the first ``(`` of a declaration candidate."""
        match = self._declaration()
        return match.group("name") if match else None


@dataclass(frozen=True)
class SourceUnit:
    """A source file: display path plus its ordered, immutable lines."""

    path: str
    lines: tuple[Line, ...]
    ends_with_newline: bool = True

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def line(self, number: int) -> Line:
        """Line by 1-based number."""
        return self.lines[number - 1]


@dataclass(frozen=True)
class MethodSpan:
    """Line range of one method-like declaration.

    ``depth_trace`` holds the brace depth after each line of the span, so its
    length always equals ``line_count``.
    """

    name: str
    start_line: int
    line_count: int
    depth_trace: tuple[int, ...] = ()

    @property
    def end_line(self) -> int:
        return self.start_line + self.line_count - 1

    @property
    def trace_length(self) -> int:
        return len(self.depth_trace)
