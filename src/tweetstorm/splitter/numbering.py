"""Ordinal numbering of split chunks.

Runs once the chunk count is final. Each chunk of a multi-chunk thread gets a
" (i/n)" tag appended into the margin the chunker reserved for it, and every
readout is recomputed to include the tag.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tweetstorm.splitter.models import SplitConfig, SplitterError
from tweetstorm.splitter.separator import SEPARATOR_PATTERN, format_ordinal_tag, ordinal_tag_length
from tweetstorm.splitter.tracking import chunk_bounds_at, update_readout

if TYPE_CHECKING:
    from tweetstorm.document import Document

logger = logging.getLogger(__name__)


def number_chunks(
    document: Document,
    begin: int,
    end: int,
    total: int,
    config: SplitConfig | None = None,
) -> None:
    """Tag and measure the chunks between begin and end.

    Args:
        document: Document split by chunk_region
        begin: Start of the split region
        end: Position after the closing separator (SplitResult.end)
        total: Number of chunks (SplitResult.chunk_count)
        config: Configuration the chunks were split with (default: SplitConfig())

    Raises:
        SplitterError: If the ordinal tags are longer than the margin the
            chunker reserved, or fewer separators than expected are found
    """
    if config is None:
        config = SplitConfig()
    tag_length = ordinal_tag_length(total)
    if tag_length > config.fuzz:
        raise SplitterError(
            f"Ordinal tags for {total} chunks need {tag_length} characters but only {config.fuzz} were reserved"
        )

    end_marker = document.marker(end, advance=True)
    try:
        cursor = begin
        for index in range(1, total + 1):
            front = document.search_forward(SEPARATOR_PATTERN, cursor, end_marker.position)
            back = None
            if front is not None:
                back = document.search_forward(SEPARATOR_PATTERN, front.end(), end_marker.position)
            if front is None or back is None:
                raise SplitterError(f"Missing separator around chunk {index} of {total}")

            if total > 1:
                body_end = document.skip_whitespace_backward(back.start(), front.end())
                document.insert(body_end, format_ordinal_tag(index, total))

            bounds = chunk_bounds_at(document, front.end())
            if bounds is None:
                raise SplitterError(f"Chunk {index} of {total} is empty")
            cursor = update_readout(document, bounds)
    finally:
        document.release(end_marker)

    logger.debug(f"Numbered {total} chunks")
