"""JSONL output for split documents.

One JSON object per chunk, in thread order. Chunks that grew past their
maximum length after editing are written anyway and counted, so callers can
decide what to do about them.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from tweetstorm.document import Document
from tweetstorm.splitter.models import ExportStats, Tweet
from tweetstorm.splitter.tracking import extract_tweets

logger = logging.getLogger(__name__)


def tweet_to_record(tweet: Tweet) -> dict[str, Any]:
    """Convert a Tweet into its JSONL record."""
    return {
        "index": tweet.index,
        "total": tweet.total,
        "length": tweet.length,
        "max_length": tweet.max_length,
        "over_limit": tweet.over_limit,
        "text": tweet.text,
    }


def write_tweets_jsonl(tweets: list[Tweet], output_path: Path) -> ExportStats:
    """Write tweets to a JSONL file.

    Args:
        tweets: Tweets in thread order
        output_path: Destination file (parent directories are created)

    Returns:
        ExportStats for the written file
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    over_limit = 0
    with output_path.open("w", encoding="utf-8") as f:
        for tweet in tweets:
            if tweet.over_limit:
                over_limit += 1
                logger.warning(
                    f"Tweet {tweet.index}/{tweet.total} is {tweet.length} characters "
                    f"(limit {tweet.max_length})"
                )
            f.write(json.dumps(tweet_to_record(tweet), ensure_ascii=False) + "\n")

    return ExportStats(
        total_tweets=len(tweets),
        over_limit=over_limit,
        tweets_written=len(tweets),
    )


def export_document(text_path: Path, output_path: Path) -> ExportStats:
    """Read a split document from disk and write its chunks as JSONL."""
    document = Document(text_path.read_text(encoding="utf-8"))
    tweets = extract_tweets(document)
    return write_tweets_jsonl(tweets, output_path)
