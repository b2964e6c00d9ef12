"""Splitter package - prose to length-bounded tweets.

This package splits text into chunks that fit a character budget, marks the
chunks with separators that show their live length, numbers them, and keeps
the readouts current while the document is edited.

Public API:
- SplitConfig: Frozen configuration dataclass
- SplitResult, ChunkBounds, Tweet, ExportStats: Result types
- SplitterError, UnchunkableTokenError, RegionError: Errors
- chunk_region: Main splitting function
- number_chunks: Ordinal tags and readouts
- fill_chunks: Cosmetic soft wrapping
- LiveTracker: Edit observer that keeps readouts current
- chunk_bounds_at, update_readout, refresh_readouts, extract_tweets: Lookups
- strip_separators: Recover prose from a split document
- write_tweets_jsonl, export_document: JSONL output
"""

from tweetstorm.splitter.core import check_region, chunk_region
from tweetstorm.splitter.filling import fill_chunks, wrap_positions
from tweetstorm.splitter.jsonl_writer import export_document, tweet_to_record, write_tweets_jsonl
from tweetstorm.splitter.models import (
    DEFAULT_FUZZ,
    DEFAULT_MAX_LENGTH,
    ChunkBounds,
    Direction,
    ExportStats,
    Granularity,
    RegionError,
    SplitConfig,
    SplitResult,
    SplitterError,
    Tweet,
    UnchunkableTokenError,
)
from tweetstorm.splitter.numbering import number_chunks
from tweetstorm.splitter.segmentation import (
    advance,
    backward_sentence,
    backward_word,
    forward_sentence,
    forward_word,
)
from tweetstorm.splitter.separator import (
    SEPARATOR_PATTERN,
    format_ordinal_tag,
    ordinal_tag_length,
    parse_indicator,
    render_closing_separator,
    render_indicator,
    render_separator,
    strip_separators,
)
from tweetstorm.splitter.tracking import (
    LiveTracker,
    chunk_bounds_at,
    extract_tweets,
    iter_chunk_bounds,
    refresh_readouts,
    update_readout,
)

__all__ = [
    # Constants
    "DEFAULT_FUZZ",
    "DEFAULT_MAX_LENGTH",
    "SEPARATOR_PATTERN",
    # Models
    "ChunkBounds",
    "Direction",
    "ExportStats",
    "Granularity",
    "SplitConfig",
    "SplitResult",
    "Tweet",
    # Errors
    "RegionError",
    "SplitterError",
    "UnchunkableTokenError",
    # Public API - Splitting
    "check_region",
    "chunk_region",
    "fill_chunks",
    "number_chunks",
    "wrap_positions",
    # Public API - Segmentation
    "advance",
    "backward_sentence",
    "backward_word",
    "forward_sentence",
    "forward_word",
    # Public API - Separators
    "format_ordinal_tag",
    "ordinal_tag_length",
    "parse_indicator",
    "render_closing_separator",
    "render_indicator",
    "render_separator",
    "strip_separators",
    # Public API - Tracking
    "LiveTracker",
    "chunk_bounds_at",
    "extract_tweets",
    "iter_chunk_bounds",
    "refresh_readouts",
    "update_readout",
    # Public API - Output
    "export_document",
    "tweet_to_record",
    "write_tweets_jsonl",
]
