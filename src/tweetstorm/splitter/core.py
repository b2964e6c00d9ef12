"""Core splitting algorithm.

Splits a region of a document into chunks that fit a length budget and
inserts a separator in front of every chunk plus one after the last.

Design rationale:
- Sentences are the preferred unit; words are the fallback when a sentence
  boundary would leave too much of the budget unused
- Every chunk reserves ``fuzz`` characters for the ordinal tag the numbering
  pass appends later, so numbering never moves a boundary
- A boundary is accepted once less than ``accept_ratio`` of the available
  length would be left unused
- A single word longer than the available length is an error, never a
  silent truncation
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tweetstorm.splitter.models import (
    Direction,
    Granularity,
    RegionError,
    SplitConfig,
    SplitResult,
    UnchunkableTokenError,
)
from tweetstorm.splitter.segmentation import advance, word_end
from tweetstorm.splitter.separator import contains_separator, render_closing_separator, render_separator

if TYPE_CHECKING:
    from tweetstorm.document import Document, Marker

logger = logging.getLogger(__name__)


def check_region(document: Document, begin: int, end: int) -> None:
    """Raise RegionError unless [begin, end) can be split."""
    if not 0 <= begin <= end <= len(document):
        raise RegionError(f"Region [{begin}, {end}) outside document of length {len(document)}")
    if document.skip_whitespace_forward(begin, end) >= end:
        raise RegionError("Region contains no text to split")
    if contains_separator(document.substring(begin, end)):
        raise RegionError("Region already contains separators")


def _insert_boundary(document: Document, position: int, floor: int, limit: Marker, config: SplitConfig) -> int:
    """Replace the whitespace around position with a separator.

    Args:
        document: Document being split
        position: Accepted boundary
        floor: Start of the chunk that ends here
        limit: End of the region
        config: Split configuration

    Returns:
        Position just after the inserted separator
    """
    left = document.skip_whitespace_backward(position, floor)
    right = document.skip_whitespace_forward(position, limit.position)
    document.delete(left, right)
    separator = render_separator(0, config.max_length)
    document.insert(left, separator)
    return left + len(separator)


def chunk_region(document: Document, begin: int, end: int, config: SplitConfig | None = None) -> SplitResult:
    """Split [begin, end) of document into length-bounded chunks.

    Algorithm, per chunk starting at ``opoint``:
    1. Advance sentence by sentence while the chunk is shorter than the
       available length. Running out of text ends the last chunk.
    2. Back off one unit, never before ``opoint``.
    3. Accept the boundary if the unused length is below
       ``accept_ratio * available``. Otherwise retry the same chunk word by
       word, or fail if already moving by words.
    4. On acceptance, swap the boundary whitespace for a separator and start
       the next chunk after it.

    Separators are inserted with a placeholder readout of 0; the numbering
    pass fills in the real lengths once the chunk count is known.

    Args:
        document: Document to split in place
        begin: Start of the region
        end: End of the region (moved outward if it falls inside a word)
        config: Split configuration (default: SplitConfig())

    Returns:
        SplitResult with the chunk count and the position after the closing separator

    Raises:
        RegionError: If the region is out of bounds, blank, or already split
        UnchunkableTokenError: If a single word exceeds the available length
    """
    if config is None:
        config = SplitConfig()
    check_region(document, begin, end)

    available = config.available
    threshold = available * config.accept_ratio
    end_marker = document.marker(word_end(document, end), advance=True)

    try:
        begin = document.skip_whitespace_forward(begin, end_marker.position)
        opening = render_separator(0, config.max_length)
        document.insert(begin, opening)
        opoint = begin + len(opening)
        position = opoint
        count = 0

        while position < end_marker.position:
            granularity = Granularity.SENTENCE
            last_chunk = False

            while True:
                while position - opoint < available:
                    moved = advance(document, position, granularity, Direction.FORWARD, end_marker.position)
                    if moved is None:
                        last_chunk = True
                        break
                    position = moved
                if last_chunk:
                    break

                backed = advance(document, position, granularity, Direction.BACKWARD, opoint)
                position = opoint if backed is None else max(backed, opoint)

                if available - (position - opoint) < threshold:
                    break
                if granularity is Granularity.SENTENCE:
                    logger.debug(f"Sentence boundary at {position} leaves chunk too short, retrying by word")
                    granularity = Granularity.WORD
                    continue
                raise UnchunkableTokenError(position, available)

            count += 1
            if last_chunk:
                break

            opoint = _insert_boundary(document, position, opoint, end_marker, config)
            position = opoint
            logger.debug(f"Chunk {count} closed, next chunk starts at {opoint}")

        # Closing separator after the last chunk, trailing whitespace dropped
        last_end = document.skip_whitespace_backward(position, opoint)
        trailing_end = document.skip_whitespace_forward(last_end, end_marker.position)
        document.delete(last_end, trailing_end)
        closing = render_closing_separator(config.max_length)
        document.insert(last_end, closing)
        final_end = last_end + len(closing)
    finally:
        document.release(end_marker)

    logger.info(f"Split region into {count} chunks of at most {config.max_length} characters")
    return SplitResult(chunk_count=count, end=final_end)
