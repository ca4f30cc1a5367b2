"""Text normalization applied before chunking and embedding."""

import re

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_text(text: object) -> str:
    """Canonicalize whitespace and line breaks.

    Each line is trimmed and its inner whitespace collapsed to a single
    space; blank lines are dropped, so runs of line breaks become one.
    Anything that is not a non-empty string yields "".
    """
    if not text or not isinstance(text, str):
        return ""
    lines = (_WHITESPACE_RUN.sub(" ", line).strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)
