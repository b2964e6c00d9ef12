"""CLI for splitting prose into tweet threads.

Commands:
    tweetstorm split     Split a text file into separator-marked tweets
    tweetstorm refresh   Recompute the length readouts of a split file
    tweetstorm export    Write the tweets of a split file as JSONL
    tweetstorm join      Strip separators and tags, recovering the prose

Workflow:
    split → edit → refresh → export

Examples:
    # Split a draft, writing the thread next to it
    tweetstorm split -i draft.txt -o thread.txt

    # Split for a 500-character limit, wrapping lines at 72 columns
    tweetstorm split -i draft.txt --max-length 500 --fill-column 72

    # After editing thread.txt by hand, fix the readouts
    tweetstorm refresh -i thread.txt

    # Export for review
    tweetstorm export -i thread.txt -o thread.jsonl
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from datetime import datetime
from pathlib import Path

from tweetstorm.config import config as project_config

# =============================================================================
# LOGGING SETUP
# =============================================================================

# Module-level logger
logger = logging.getLogger("tweetstorm")


def _setup_logging(log_dir: Path | None = None, verbose: bool = False) -> Path:
    """Configure logging with file and console handlers.

    Args:
        log_dir: Directory for log files (default: ./logs/)
        verbose: If True, set console to DEBUG level

    Returns:
        Path to the log file
    """
    if log_dir is None:
        log_dir = Path("logs")
    log_dir.mkdir(parents=True, exist_ok=True)

    # Create timestamped log file
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"tweetstorm_{timestamp}.log"

    logger.setLevel(logging.DEBUG)

    # File handler - captures everything with full detail
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_formatter)

    # Console handler - less verbose unless --verbose flag
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_formatter = logging.Formatter("%(levelname)s: %(message)s")
    console_handler.setFormatter(console_formatter)

    # Clear existing handlers and add new ones
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    logger.info(f"Logging initialized - log file: {log_file}")
    return log_file


def _log_exception(msg: str, exc: Exception) -> None:
    """Log an exception with full traceback to file.

    Args:
        msg: Context message describing what failed
        exc: The exception that was raised
    """
    logger.error(f"{msg}: {type(exc).__name__}: {exc}")
    logger.debug(f"Traceback:\n{traceback.format_exc()}")


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="tweetstorm",
        description="Split prose into a thread of length-bounded tweets",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug output on the console",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=project_config.log_dir,
        help=f"Directory for log files (default: {project_config.log_dir}/)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # =========================================================================
    # SPLIT SUBCOMMAND
    # =========================================================================
    split_parser = subparsers.add_parser(
        "split",
        help="Split a text file into tweets",
        description=(
            "Insert separators between length-bounded chunks of the input, "
            "number the chunks and show each chunk's length in its separator."
        ),
    )
    split_parser.add_argument(
        "-i",
        "--input",
        type=Path,
        required=True,
        help="Text file to split",
    )
    split_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Where to write the split document (default: stdout)",
    )
    split_parser.add_argument(
        "--max-length",
        type=int,
        default=project_config.max_length,
        help=f"Maximum characters per tweet (default: {project_config.max_length})",
    )
    split_parser.add_argument(
        "--fill-column",
        type=int,
        default=project_config.fill_column,
        help="Soft-wrap tweet bodies at this column (default: no wrapping)",
    )

    # =========================================================================
    # REFRESH SUBCOMMAND
    # =========================================================================
    refresh_parser = subparsers.add_parser(
        "refresh",
        help="Recompute the length readouts of a split file",
        description="Rewrite every separator's length readout to match the tweet after it.",
    )
    refresh_parser.add_argument(
        "-i",
        "--input",
        type=Path,
        required=True,
        help="Split document to refresh",
    )
    refresh_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Where to write the result (default: overwrite input)",
    )

    # =========================================================================
    # EXPORT SUBCOMMAND
    # =========================================================================
    export_parser = subparsers.add_parser(
        "export",
        help="Write the tweets of a split file as JSONL",
        description="One JSON object per tweet with its index, total, length and text.",
    )
    export_parser.add_argument(
        "-i",
        "--input",
        type=Path,
        required=True,
        help="Split document to export",
    )
    export_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        required=True,
        help="Destination .jsonl file",
    )

    # =========================================================================
    # JOIN SUBCOMMAND
    # =========================================================================
    join_parser = subparsers.add_parser(
        "join",
        help="Strip separators and ordinal tags from a split file",
        description="Recover the prose of a split document.",
    )
    join_parser.add_argument(
        "-i",
        "--input",
        type=Path,
        required=True,
        help="Split document to join",
    )
    join_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Where to write the prose (default: stdout)",
    )

    return parser


def _write_output(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")


def _run_split_process(args: argparse.Namespace) -> int:
    """Split the input file into tweets.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    # Import here to speed up --help
    from dataclasses import replace

    from tweetstorm.session import Session
    from tweetstorm.splitter import SplitterError

    input_file: Path = args.input
    if not input_file.exists():
        print(f"Error: Input file does not exist: {input_file}")
        return 1

    try:
        split_config = replace(
            project_config.split_config(),
            max_length=args.max_length,
            fill_column=args.fill_column,
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    session = Session(input_file.read_text(encoding="utf-8"), split_config)
    try:
        result = session.chunk_whole_document()
    except SplitterError as e:
        _log_exception(f"Failed to split {input_file}", e)
        print(f"Error: {e}")
        return 1

    _write_output(session.text, args.output)
    logger.info(f"Split {input_file} into {result.chunk_count} tweets")
    if args.output is not None:
        print(f"Tweets:    {result.chunk_count}")
        print(f"Output:    {args.output}")
    return 0


def _run_refresh_process(args: argparse.Namespace) -> int:
    """Recompute the readouts of a split file.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    from tweetstorm.session import Session

    input_file: Path = args.input
    if not input_file.exists():
        print(f"Error: Input file does not exist: {input_file}")
        return 1

    session = Session(input_file.read_text(encoding="utf-8"))
    count = session.refresh_readouts()
    if count == 0:
        print(f"Error: No tweets found in {input_file}")
        return 1

    output: Path = args.output or input_file
    _write_output(session.text, output)

    over_limit = [tweet for tweet in session.tweets() if tweet.over_limit]
    print(f"Tweets:    {count}")
    for tweet in over_limit:
        print(f"  Warning: tweet {tweet.index} is {tweet.length}/{tweet.max_length} characters")
    return 0


def _run_export_process(args: argparse.Namespace) -> int:
    """Write a split file's tweets as JSONL.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    from tweetstorm.splitter import export_document

    input_file: Path = args.input
    if not input_file.exists():
        print(f"Error: Input file does not exist: {input_file}")
        return 1

    try:
        stats = export_document(input_file, args.output)
    except OSError as e:
        _log_exception(f"Failed to export {input_file}", e)
        print(f"Error: {e}")
        return 1

    if stats.tweets_written == 0:
        print(f"Warning: No tweets found in {input_file}")
    print(f"Written:   {stats.tweets_written} tweets")
    if stats.over_limit > 0:
        print(f"Over:      {stats.over_limit} tweets exceed their limit")
    return 0


def _run_join_process(args: argparse.Namespace) -> int:
    """Recover prose from a split file.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    from tweetstorm.splitter import strip_separators

    input_file: Path = args.input
    if not input_file.exists():
        print(f"Error: Input file does not exist: {input_file}")
        return 1

    prose = strip_separators(input_file.read_text(encoding="utf-8"))
    _write_output(prose + "\n", args.output)
    return 0


def main() -> None:
    """Run the tweetstorm command line."""
    parser = _create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _setup_logging(args.log_dir, verbose=args.verbose)

    commands = {
        "split": _run_split_process,
        "refresh": _run_refresh_process,
        "export": _run_export_process,
        "join": _run_join_process,
    }
    try:
        exit_code = commands[args.command](args)
    except KeyboardInterrupt:
        print("\n\nInterrupted")
        exit_code = 130  # Standard exit code for SIGINT
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
