"""Core data models for the splitting pipeline.

This module contains the types shared by the splitter:
- SplitConfig: Configuration parameters for a split run
- Granularity / Direction: Segmenter units and movement directions
- SplitResult: What a chunker run reports back
- ChunkBounds: Location of one chunk body inside a document
- Tweet: A finished chunk with its numbering, for export
- ExportStats: Statistics from JSONL writing
- SplitterError and subclasses
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Worst-case ordinal tag " (NN/NN)" reserved at the end of every chunk
DEFAULT_FUZZ = 8
DEFAULT_MAX_LENGTH = 280


# =============================================================================
# EXCEPTIONS
# =============================================================================


class SplitterError(Exception):
    """Base exception for all splitter errors."""

    pass


class UnchunkableTokenError(SplitterError):
    """Raised when no sentence or word break gives an acceptable chunk.

    Either a single word is longer than the available length, or every break
    near position would leave too much of the available length unused.
    """

    def __init__(self, position: int, available: int) -> None:
        self.position = position
        self.available = available
        super().__init__(
            f"Cannot place a chunk boundary after position {position} within {available} characters"
        )


class RegionError(SplitterError):
    """Raised when a region cannot be split (empty, out of bounds, already split)."""

    pass


# =============================================================================
# CONFIGURATION
# =============================================================================


@dataclass(frozen=True)
class SplitConfig:
    """Configuration for splitting text into tweets.

    Attributes:
        max_length: Maximum characters per chunk, ordinal tag included (default: 280)
        fuzz: Characters reserved per chunk for the ordinal tag (default: 8)
        accept_ratio: A boundary is accepted once the unused length drops below
            this fraction of the available length (default: 0.5)
        fill_column: Soft-wrap chunk bodies at this width; None disables
            wrapping (default: None)
    """

    max_length: int = DEFAULT_MAX_LENGTH
    fuzz: int = DEFAULT_FUZZ
    accept_ratio: float = 0.5
    fill_column: int | None = None

    def __post_init__(self) -> None:
        if self.fuzz < 0:
            raise ValueError("fuzz must be non-negative")
        if self.max_length <= self.fuzz:
            raise ValueError("max_length must be greater than fuzz")
        if not 0.0 < self.accept_ratio <= 1.0:
            raise ValueError("accept_ratio must be in (0, 1]")
        if self.fill_column is not None and self.fill_column <= 0:
            raise ValueError("fill_column must be positive")

    @property
    def available(self) -> int:
        """Length left for chunk text once the tag margin is reserved."""
        return self.max_length - self.fuzz


class Granularity(Enum):
    """Unit the segmenter moves by."""

    SENTENCE = "sentence"
    WORD = "word"


class Direction(Enum):
    FORWARD = 1
    BACKWARD = -1


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class SplitResult:
    """Outcome of a chunker run.

    Attributes:
        chunk_count: Number of chunks produced
        end: Position just after the closing separator
    """

    chunk_count: int
    end: int


@dataclass(frozen=True)
class ChunkBounds:
    """Where a chunk body sits in a document.

    Attributes:
        start: First non-blank character after the fronting separator
        end: Position after the last non-blank character before the next separator
        separator_start: Start of the fronting separator match
        separator_end: End of the fronting separator match
    """

    start: int
    end: int
    separator_start: int
    separator_end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass
class Tweet:
    """A chunk of a split document.

    Attributes:
        index: Position in the thread (1-indexed)
        total: Number of chunks in the thread
        text: Chunk body, ordinal tag included
        max_length: Denominator shown in the chunk's readout
    """

    index: int
    total: int
    text: str
    max_length: int

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def over_limit(self) -> bool:
        return self.length > self.max_length


@dataclass
class ExportStats:
    """Statistics from JSONL writing.

    Attributes:
        total_tweets: Number of tweets handed to the writer
        over_limit: Tweets longer than their max_length (written anyway)
        tweets_written: Lines written to the output file
    """

    total_tweets: int
    over_limit: int
    tweets_written: int
