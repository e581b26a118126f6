"""Flatten tree-formatted store listings into slash-separated entry paths.

The listing printed by ``pass ls`` / ``pass find`` looks like::

    Search Terms: google
    ├── google.com
    │   ├── u1
    │   └── u2
    └── apple.com
        └── u1

Nesting is inferred from the number of connector characters in front of each
name. Only adjacent lines are compared, so this works as long as every level
is indented by the same number of characters.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ironpass.constants import DEFAULT_HEADER_PREFIXES, PATH_SEPARATOR

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

log = logging.getLogger(__name__)

# space, tab, no-break space, then the box-drawing connectors
MARKUP_CHARACTERS = " \t\u00a0\u2502\u251c\u2514\u2500"


def is_markup_character(ch: str) -> bool:
    """Return True if ``ch`` is whitespace or a tree connector glyph."""
    return len(ch) == 1 and ch in MARKUP_CHARACTERS


def count_leading_spaces(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def depth_of(line: str) -> int:
    """Count the markup characters that prefix the name on ``line``."""
    depth = 0
    for ch in line:
        if not is_markup_character(ch):
            break
        depth += 1
    return depth


def is_header_line(line: str, prefixes: Sequence[str] = DEFAULT_HEADER_PREFIXES) -> bool:
    """Return True for banner lines such as ``Search Terms: google``."""
    stripped = line.lstrip()
    return any(stripped.startswith(prefix) for prefix in prefixes)


def normalize_margin(lines: Iterable[str]) -> list[str]:
    """Drop blank lines and remove the common leading-space margin.

    Only U+0020 counts towards the margin; tabs and connector glyphs are
    left in place so relative depth is unchanged.
    """
    non_empty = [line for line in lines if line.strip()]
    if not non_empty:
        return []
    margin = min(count_leading_spaces(line) for line in non_empty)
    if margin == 0:
        return non_empty
    return [line[margin:] for line in non_empty]


def _pop(stack: list[str], count: int) -> None:
    # Popping an empty stack is the normal first step of a root-level listing
    if 0 < len(stack) < count:
        log.debug("Stack underflow: popping %d of %d entries", count, len(stack))
    del stack[max(len(stack) - count, 0) :]


def flatten_tree(lines: Iterable[str]) -> list[str]:
    """Turn margin-normalized tree lines into leaf paths.

    Moving to a shallower line closes the previous leaf and its branch (two
    pops), a sibling closes only the previous leaf (one pop), a deeper line
    is a child and closes nothing. Pops past the bottom of the stack are
    clamped, and an empty stack is never emitted.

    Args:
        lines: Tree lines without headers, blank lines or a common margin.

    Returns:
        Paths in the order their leaves appear in the listing.
    """
    stack: list[str] = []
    result: list[str] = []
    previous_depth = 0

    for line in lines:
        depth = depth_of(line)
        name = line[depth:]

        if depth <= previous_depth:
            if stack:
                result.append(PATH_SEPARATOR.join(stack))
            _pop(stack, 2 if depth < previous_depth else 1)

        stack.append(name)
        previous_depth = depth

    if stack:
        result.append(PATH_SEPARATOR.join(stack))
    return result


def parse_listing(
    text: str,
    *,
    header_prefixes: Sequence[str] = DEFAULT_HEADER_PREFIXES,
) -> list[str]:
    """Parse plain listing text (escape sequences already stripped).

    Args:
        text: Complete output of a tree-formatted listing.
        header_prefixes: Banner prefixes whose lines carry no tree data.

    Returns:
        Slash-joined entry paths, empty for blank or header-only input.
    """
    lines = [line for line in text.splitlines() if not is_header_line(line, header_prefixes)]
    entries = flatten_tree(normalize_margin(lines))
    log.debug("Parsed %d entries from %d lines", len(entries), len(lines))
    return entries


__all__ = [
    "MARKUP_CHARACTERS",
    "count_leading_spaces",
    "depth_of",
    "flatten_tree",
    "is_header_line",
    "is_markup_character",
    "normalize_margin",
    "parse_listing",
]
