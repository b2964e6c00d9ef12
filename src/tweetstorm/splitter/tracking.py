"""Live length tracking for split documents.

After a split, every edit inside a chunk changes its length. The tracker
finds the chunk around the edit by looking for the separators on either
side and rewrites the readout of the separator in front of it.

Lookups that find no enclosing chunk are not errors: the tracker simply
does nothing. That covers edits inside a separator, in an empty chunk,
between two threads and outside any thread.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tweetstorm.splitter.models import ChunkBounds, Tweet
from tweetstorm.splitter.separator import SEPARATOR_PATTERN, is_closing, render_indicator

if TYPE_CHECKING:
    from collections.abc import Iterator

    from tweetstorm.document import Change, Document

logger = logging.getLogger(__name__)


# =============================================================================
# BOUNDARY LOOKUP
# =============================================================================


def _inside_separator(document: Document, position: int) -> bool:
    for match in SEPARATOR_PATTERN.finditer(document.text):
        if match.start() >= position:
            return False
        if position < match.end():
            return True
    return False


def chunk_bounds_at(document: Document, position: int) -> ChunkBounds | None:
    """Find the chunk enclosing position.

    Args:
        document: A split document
        position: Any position, typically where an edit happened

    Returns:
        Bounds of the enclosing chunk, or None when position is not inside one
    """
    if _inside_separator(document, position):
        return None

    front = document.search_backward(SEPARATOR_PATTERN, position)
    if front is None or is_closing(front):
        return None
    back = document.search_forward(SEPARATOR_PATTERN, max(position, front.end()))
    if back is None:
        return None

    start = document.skip_whitespace_forward(front.end(), back.start())
    end = document.skip_whitespace_backward(back.start(), front.end())
    if end <= start:
        return None

    return ChunkBounds(
        start=start,
        end=end,
        separator_start=front.start(),
        separator_end=front.end(),
    )


def iter_chunk_bounds(document: Document, begin: int = 0, end: int | None = None) -> Iterator[ChunkBounds]:
    """Yield the bounds of every non-empty chunk between begin and end, in order."""
    matches = list(SEPARATOR_PATTERN.finditer(document.text, begin, len(document) if end is None else end))
    for front, back in zip(matches, matches[1:]):
        if is_closing(front):
            continue
        start = document.skip_whitespace_forward(front.end(), back.start())
        chunk_end = document.skip_whitespace_backward(back.start(), front.end())
        if chunk_end > start:
            yield ChunkBounds(
                start=start,
                end=chunk_end,
                separator_start=front.start(),
                separator_end=front.end(),
            )


# =============================================================================
# READOUT UPDATE
# =============================================================================


def update_readout(document: Document, bounds: ChunkBounds) -> int:
    """Rewrite the length readout of the separator in front of a chunk.

    The direction glyph and the maximum length are kept. The document is
    only edited when the readout actually changes.

    Args:
        document: A split document
        bounds: Bounds of the chunk, as returned by chunk_bounds_at

    Returns:
        End of the (possibly rewritten) separator
    """
    match = SEPARATOR_PATTERN.match(document.text, bounds.separator_start)
    if match is None:
        raise ValueError(f"No separator at position {bounds.separator_start}")

    direction, _, max_length = match.groups()
    indicator = render_indicator(bounds.length, int(max_length), direction)
    if indicator != match.group(0):
        document.replace(match.start(), match.end(), indicator)
    return match.start() + len(indicator)


def refresh_readouts(document: Document) -> int:
    """Rewrite every chunk readout in the document.

    Returns:
        Number of chunks found
    """
    count = 0
    position = 0
    while True:
        bounds = next(iter_chunk_bounds(document, position), None)
        if bounds is None:
            return count
        position = update_readout(document, bounds)
        count += 1


def _number_thread(chunks: list[tuple[str, int]]) -> list[Tweet]:
    total = len(chunks)
    return [
        Tweet(index=index, total=total, text=text, max_length=max_length)
        for index, (text, max_length) in enumerate(chunks, 1)
    ]


def extract_tweets(document: Document) -> list[Tweet]:
    """Collect the chunk bodies of a split document.

    A closing separator ends a thread, so a document split in several
    regions yields several threads, each numbered from 1.
    """
    tweets: list[Tweet] = []
    thread: list[tuple[str, int]] = []
    for bounds in iter_chunk_bounds(document):
        front = SEPARATOR_PATTERN.match(document.text, bounds.separator_start)
        max_length = int(front.group(3)) if front else 0
        thread.append((document.substring(bounds.start, bounds.end), max_length))

        back = document.search_forward(SEPARATOR_PATTERN, bounds.end)
        if back is None or is_closing(back):
            tweets.extend(_number_thread(thread))
            thread = []

    tweets.extend(_number_thread(thread))
    return tweets


# =============================================================================
# LIVE TRACKER
# =============================================================================


class LiveTracker:
    """Keeps chunk readouts current while a document is edited.

    The tracker is registered as a document listener only while enabled.

    Args:
        document: Document to observe
    """

    def __init__(self, document: Document) -> None:
        self.document = document
        self._enabled = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        if not self._enabled:
            self.document.add_listener(self._on_change)
            self._enabled = True

    def disable(self) -> None:
        if self._enabled:
            self.document.remove_listener(self._on_change)
            self._enabled = False

    def _on_change(self, document: Document, change: Change) -> None:
        self.on_edit(change.start)

    def on_edit(self, position: int) -> None:
        """Update the readout of the chunk around position.

        Never raises: lookup misses are ignored and other failures are logged.
        """
        try:
            bounds = chunk_bounds_at(self.document, position)
            if bounds is None:
                logger.debug(f"No chunk encloses position {position}")
                return
            update_readout(self.document, bounds)
        except Exception:
            logger.warning(f"Failed to update readout at position {position}", exc_info=True)
