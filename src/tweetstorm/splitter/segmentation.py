"""Sentence and word movement over a document.

The chunker moves through text one unit at a time and needs to know when it
cannot move any further. Every movement function therefore returns the new
position, or None when there is nothing left to move over, and never raises
at the end of the text.

Units:
- Word: a maximal run of non-whitespace characters
- Sentence: text up to a terminator run (. ! ? …) plus closing quotes or
  brackets, followed by whitespace or the end of the text. A blank line
  also ends a sentence.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tweetstorm.splitter.models import Direction, Granularity

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from tweetstorm.document import Document

# Terminator run with optional closers, or the end of a paragraph
SENTENCE_END_PATTERN = re.compile(
    r"[.!?…‽]+[\"'”’)\]}»]*(?=\s|$)"
    r"|(?<=\S)(?=[ \t]*\n[ \t]*\n)"
)


def _sentence_ends(text: str, start: int, limit: int) -> Iterator[int]:
    """Yield sentence end positions in text[start:limit], in order."""
    for match in SENTENCE_END_PATTERN.finditer(text, start, limit):
        yield match.end()


def forward_sentence(document: Document, position: int, limit: int) -> int | None:
    """Move to the end of the sentence at or after position.

    Args:
        document: Document to move in
        position: Current position
        limit: Movement never goes past this position

    Returns:
        End of the sentence, or None if only whitespace remains before limit
    """
    content = document.skip_whitespace_forward(position, limit)
    if content >= limit:
        return None

    for end in _sentence_ends(document.text, content, limit):
        if end > content:
            return end

    # Unterminated trailing sentence runs to the last non-blank character
    return document.skip_whitespace_backward(limit, content)


def backward_sentence(document: Document, position: int, floor: int) -> int | None:
    """Move to the start of the sentence containing position.

    When position is already at a sentence start, moves to the start of the
    previous sentence.

    Args:
        document: Document to move in
        position: Current position
        floor: Movement never goes before this position

    Returns:
        Start of the sentence, or None if there is nothing between floor and position
    """
    content_end = document.skip_whitespace_backward(position, floor)
    if content_end <= floor:
        return None

    previous_end = floor
    for end in _sentence_ends(document.text, floor, len(document)):
        if end >= content_end:
            break
        previous_end = end

    start = document.skip_whitespace_forward(previous_end, content_end)
    return max(start, floor)


def forward_word(document: Document, position: int, limit: int) -> int | None:
    """Move to the end of the word at or after position."""
    position = document.skip_whitespace_forward(position, limit)
    if position >= limit:
        return None
    text = document.text
    while position < limit and not text[position].isspace():
        position += 1
    return position


def backward_word(document: Document, position: int, floor: int) -> int | None:
    """Move to the start of the word containing or preceding position."""
    position = document.skip_whitespace_backward(position, floor)
    if position <= floor:
        return None
    text = document.text
    while position > floor and not text[position - 1].isspace():
        position -= 1
    return position


_MOVES: dict[tuple[Granularity, Direction], Callable[[Document, int, int], int | None]] = {
    (Granularity.SENTENCE, Direction.FORWARD): forward_sentence,
    (Granularity.SENTENCE, Direction.BACKWARD): backward_sentence,
    (Granularity.WORD, Direction.FORWARD): forward_word,
    (Granularity.WORD, Direction.BACKWARD): backward_word,
}


def advance(
    document: Document,
    position: int,
    unit: Granularity,
    direction: Direction,
    boundary: int,
) -> int | None:
    """Move one unit from position.

    Args:
        document: Document to move in
        position: Current position
        unit: Sentence or word
        direction: Forward or backward
        boundary: The limit for forward moves, the floor for backward moves

    Returns:
        The new position, or None if no movement is possible
    """
    return _MOVES[(unit, direction)](document, position, boundary)


def word_end(document: Document, position: int) -> int:
    """Return position moved outward to the end of the word it falls inside."""
    text = document.text
    if position <= 0 or position >= len(text) or text[position - 1].isspace():
        return position
    while position < len(text) and not text[position].isspace():
        position += 1
    return position
