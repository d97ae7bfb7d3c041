"""Line-level lexical mode tracking for Java-family sources.

Brace counting must ignore braces that live inside comments and literals.
``strip_non_code`` removes comments and empties string, char and text-block
literals one physical line at a time, carrying the lexical mode across lines.

This is a heuristic, not a tokenizer: unicode escapes, nested generics in
annotations and GString ``${...}`` interpolation are not understood.
"""

from enum import Enum


class LexState(Enum):
    """Lexical mode at a line boundary."""

    CODE = "code"
    BLOCK_COMMENT = "block_comment"
    TEXT_BLOCK = "text_block"


def strip_non_code(
    text: str, state: LexState = LexState.CODE, fill: str = ""
) -> tuple[str, LexState]:
    """Return the code portion of ``text`` and the mode at the end of the line.

    Comments are dropped, literals are replaced by a literal of the same quote
    holding only ``fill`` so the line keeps its shape (``"{"`` becomes ``""``).
    Empty literals stay empty, so a non-empty ``fill`` tells them apart.
    """
    out: list[str] = []
    i, n = 0, len(text)

    while i < n:
        if state is LexState.BLOCK_COMMENT:
            end = text.find("*/", i)
            if end == -1:
                return "".join(out), state
            i = end + 2
            state = LexState.CODE
            continue

        if state is LexState.TEXT_BLOCK:
            end = text.find('"""', i)
            if end == -1:
                return "".join(out), state
            out.append('"' + fill + '"')
            i = end + 3
            state = LexState.CODE
            continue

        if text.startswith("//", i):
            break
        if text.startswith("/*", i):
            state = LexState.BLOCK_COMMENT
            i += 2
            continue
        if text.startswith('"""', i):
            state = LexState.TEXT_BLOCK
            i += 3
            continue

        ch = text[i]
        if ch == '"' or ch == "'":
            j = i + 1
            while j < n and text[j] != ch:
                # skip the escaped character
                j += 2 if text[j] == "\\" else 1
            out.append(ch + (fill if j > i + 1 else "") + ch)
            i = j + 1
            continue

        out.append(ch)
        i += 1

    return "".join(out), state


def mask_literals(text: str, state: LexState = LexState.CODE) -> tuple[str, LexState]:
    """Like ``strip_non_code``, but every non-empty literal becomes ``"_"``.

    Pattern checks match against this view: a literal is one opaque token,
    so quotes from two different literals never pair up.
    """
    return strip_non_code(text, state, fill="_")
