"""ANSI escape sequence stripper."""

from __future__ import annotations

import re

# CSI color and cursor sequences only: ESC [ digits/semicolons final-byte
ESCAPE_SEQUENCE = re.compile(r"\x1B\[[0-9;]*[mGKH]")


def strip_escape_sequences(text: str) -> str:
    """Remove color and cursor control sequences from text.

    The whole buffer is processed at once so a sequence is never split by a
    line boundary. Anything not matching the pattern, including a lone ESC
    byte, is left untouched.

    Args:
        text: Input text potentially containing escape sequences.

    Returns:
        Text with every matched sequence removed.
    """
    if not text:
        return ""
    # Removing one sequence can splice the halves of another together
    text, count = ESCAPE_SEQUENCE.subn("", text)
    while count:
        text, count = ESCAPE_SEQUENCE.subn("", text)
    return text
