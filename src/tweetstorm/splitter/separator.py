"""Separator rendering and parsing.

A separator sits between two chunks and shows the live length of the chunk
that follows it::

    <!-- ↓ [[[ 137 / 280 ]]] -->

It is always written surrounded by blank lines. Lookups only match the
comment itself; the blank lines are skipped as whitespace.

The separator after the last chunk of a thread carries the up glyph and a
readout of 0. It closes the thread and fronts no chunk, so text following
it is never measured as a tweet.
"""

from __future__ import annotations

import re

DOWN = "↓"
UP = "↑"
CLOSING = UP

# Direction glyph, live length, maximum length
SEPARATOR_PATTERN = re.compile(r"<!-- ([↓↑]) \[\[\[ (0|[1-9][0-9]*) / (0|[1-9][0-9]*) \]\]\] -->")

# Ordinal tag appended by the numbering pass, e.g. " (2/5)"
ORDINAL_TAG_PATTERN = re.compile(r" \(([1-9][0-9]*)/([1-9][0-9]*)\)$")

# Separator together with the blank space around it
_SEPARATOR_BLOCK_PATTERN = re.compile(r"\s*" + SEPARATOR_PATTERN.pattern + r"\s*")


def render_indicator(length: int, max_length: int, direction: str = DOWN) -> str:
    """Render the comment part of a separator.

    Example:
        >>> render_indicator(12, 280)
        '<!-- ↓ [[[ 12 / 280 ]]] -->'
    """
    return f"<!-- {direction} [[[ {length} / {max_length} ]]] -->"


def render_separator(length: int, max_length: int, direction: str = DOWN) -> str:
    """Render a full separator, blank lines included."""
    return f"\n\n{render_indicator(length, max_length, direction)}\n\n"


def render_closing_separator(max_length: int) -> str:
    """Render the separator that ends a thread."""
    return render_separator(0, max_length, CLOSING)


def is_closing(match: re.Match[str]) -> bool:
    """Whether a SEPARATOR_PATTERN match is a closing separator."""
    return match.group(1) == CLOSING


def format_ordinal_tag(index: int, total: int) -> str:
    """Format the ordinal tag for chunk index of total.

    Example:
        >>> format_ordinal_tag(2, 3)
        ' (2/3)'
    """
    return f" ({index}/{total})"


def ordinal_tag_length(total: int) -> int:
    """Length of the longest ordinal tag in a thread of total chunks (0 for one chunk)."""
    return len(format_ordinal_tag(total, total)) if total > 1 else 0


def parse_indicator(text: str) -> tuple[str, int, int] | None:
    """Parse a separator comment into (direction, length, max_length).

    Returns:
        The parsed fields, or None if text is not exactly one separator comment
    """
    match = SEPARATOR_PATTERN.fullmatch(text.strip())
    if match is None:
        return None
    return match.group(1), int(match.group(2)), int(match.group(3))


def contains_separator(text: str) -> bool:
    return SEPARATOR_PATTERN.search(text) is not None


def strip_ordinal_tag(text: str) -> str:
    """Remove a trailing ordinal tag from a chunk body, if present."""
    return ORDINAL_TAG_PATTERN.sub("", text)


def strip_separators(text: str) -> str:
    """Recover prose from a split document.

    Separators and the blank space around them become a single space and
    ordinal tags are dropped. Text before the first separator and after the
    last one is kept.

    Args:
        text: A document containing separators

    Returns:
        The joined chunk bodies
    """
    pieces = _SEPARATOR_BLOCK_PATTERN.split(text)
    # split() interleaves the three capture groups between the pieces
    bodies = pieces[::4]
    cleaned = [strip_ordinal_tag(body.strip()) for body in bodies]
    return " ".join(body for body in cleaned if body)
