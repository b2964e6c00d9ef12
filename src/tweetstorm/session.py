"""Editing session: one document, its splitter runs and its live tracker.

This is the seam a host editing surface talks to. It sequences a split run
(chunk, optional fill, number) and makes sure the live tracker is not
listening while the splitter's own edits are in flight.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import TYPE_CHECKING

from tweetstorm.document import Document
from tweetstorm.splitter.core import check_region, chunk_region
from tweetstorm.splitter.filling import fill_chunks
from tweetstorm.splitter.models import SplitConfig, SplitResult, SplitterError, Tweet
from tweetstorm.splitter.numbering import number_chunks
from tweetstorm.splitter.segmentation import word_end
from tweetstorm.splitter.separator import ordinal_tag_length
from tweetstorm.splitter.tracking import LiveTracker, extract_tweets, refresh_readouts

if TYPE_CHECKING:
    from collections.abc import Iterator

    from tweetstorm.document import Marker

logger = logging.getLogger(__name__)


class Session:
    """A document being split into tweets and edited afterwards.

    Args:
        text: Initial document content
        config: Split configuration (default: SplitConfig())
    """

    def __init__(self, text: str = "", config: SplitConfig | None = None) -> None:
        self.document = Document(text)
        self.config = config or SplitConfig()
        self.tracker = LiveTracker(self.document)

    @property
    def text(self) -> str:
        return self.document.text

    # =========================================================================
    # SPLITTING
    # =========================================================================

    @contextmanager
    def _tracking_suspended(self) -> Iterator[None]:
        was_enabled = self.tracker.enabled
        self.tracker.disable()
        try:
            yield
        finally:
            if was_enabled:
                self.tracker.enable()

    def chunk_region(self, begin: int, end: int, max_length: int | None = None) -> SplitResult:
        """Split [begin, end), number the chunks and fill in their readouts.

        When the chunk count turns out to need longer ordinal tags than the
        configured fuzz reserves (100 chunks or more with the default), the
        region is split again with a margin wide enough for the tags.

        On failure the region is restored to its original text before the
        error is re-raised.

        Args:
            begin: Start of the region
            end: End of the region
            max_length: Override for config.max_length

        Returns:
            SplitResult with the chunk count and the end of the split region

        Raises:
            RegionError: If the region cannot be split
            UnchunkableTokenError: If no acceptable chunk boundary exists
        """
        config = self.config if max_length is None else replace(self.config, max_length=max_length)
        check_region(self.document, begin, end)

        stop = word_end(self.document, end)
        original = self.document.substring(begin, stop)
        stop_marker = self.document.marker(stop, advance=True)
        try:
            with self._tracking_suspended():
                try:
                    return self._split(begin, end, stop_marker, original, config)
                except SplitterError:
                    self._restore(begin, stop_marker, original)
                    logger.warning(f"Split of [{begin}, {end}) failed, region restored")
                    raise
        finally:
            self.document.release(stop_marker)

    def _split(self, begin: int, end: int, stop: Marker, original: str, config: SplitConfig) -> SplitResult:
        result = chunk_region(self.document, begin, end, config)
        while ordinal_tag_length(result.chunk_count) > config.fuzz:
            margin = ordinal_tag_length(result.chunk_count)
            if margin >= config.max_length:
                raise SplitterError(
                    f"Ordinal tags for {result.chunk_count} chunks do not fit in {config.max_length} characters"
                )
            logger.info(f"{result.chunk_count} chunks need a {margin}-character tag margin, splitting again")
            self._restore(begin, stop, original)
            config = replace(config, fuzz=margin)
            result = chunk_region(self.document, begin, end, config)

        if config.fill_column is not None:
            fill_chunks(self.document, begin, result.end, config.fill_column)
        number_chunks(self.document, begin, result.end, result.chunk_count, config)
        return SplitResult(chunk_count=result.chunk_count, end=stop.position)

    def _restore(self, begin: int, stop: Marker, original: str) -> None:
        if self.document.substring(begin, stop.position) != original:
            self.document.replace(begin, stop.position, original)

    def chunk_whole_document(self, max_length: int | None = None) -> SplitResult:
        return self.chunk_region(0, len(self.document), max_length)

    # =========================================================================
    # LIVE TRACKING
    # =========================================================================

    def enable_live_tracking(self) -> None:
        self.tracker.enable()

    def disable_live_tracking(self) -> None:
        self.tracker.disable()

    def on_edit(self, position: int) -> None:
        self.tracker.on_edit(position)

    # =========================================================================
    # EDITING AND READING
    # =========================================================================

    def insert(self, position: int, text: str) -> None:
        self.document.insert(position, text)

    def delete(self, start: int, end: int) -> None:
        self.document.delete(start, end)

    def refresh_readouts(self) -> int:
        """Recompute every readout, e.g. after edits made while tracking was off."""
        with self._tracking_suspended():
            return refresh_readouts(self.document)

    def tweets(self) -> list[Tweet]:
        return extract_tweets(self.document)
