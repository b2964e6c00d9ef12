"""Soft wrapping of chunk bodies.

Purely cosmetic: single spaces between words are turned into newlines so
that lines stay within a fill column. Each replacement swaps one character
for one character, so chunk lengths and readouts are unaffected.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tweetstorm.splitter.tracking import iter_chunk_bounds

if TYPE_CHECKING:
    from tweetstorm.document import Document


def wrap_positions(text: str, width: int) -> list[int]:
    """Find the spaces in text to turn into newlines.

    Only a space with non-blank characters on both sides is a candidate, so
    wrapping never creates blank lines. Words longer than width stay on a
    line of their own.

    Args:
        text: Chunk body
        width: Fill column

    Returns:
        Offsets into text of the spaces to replace, ascending
    """
    breaks: list[int] = []
    line_start = 0
    last_space: int | None = None

    for offset, char in enumerate(text):
        if char == "\n":
            line_start = offset + 1
            last_space = None
            continue
        if char == " " and 0 < offset < len(text) - 1 and not text[offset - 1].isspace() and not text[offset + 1].isspace():
            last_space = offset
        if offset - line_start >= width and last_space is not None:
            breaks.append(last_space)
            line_start = last_space + 1
            last_space = None

    return breaks


def fill_chunks(document: Document, begin: int, end: int, width: int) -> int:
    """Soft-wrap every chunk body between begin and end.

    Returns:
        Number of spaces turned into newlines
    """
    replaced = 0
    for bounds in list(iter_chunk_bounds(document, begin, end)):
        body = document.substring(bounds.start, bounds.end)
        for offset in wrap_positions(body, width):
            position = bounds.start + offset
            document.replace(position, position + 1, "\n")
            replaced += 1
    return replaced
