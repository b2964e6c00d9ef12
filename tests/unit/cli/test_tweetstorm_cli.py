"""Unit tests for the tweetstorm command line.

Test strategy:
- Test argument parsing defaults and options
- Test input validation and exit codes
- Test each subcommand's file output
"""

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from tweetstorm.cli import _create_parser, main
from tweetstorm.splitter import SEPARATOR_PATTERN, render_closing_separator, render_separator


def _run(tmp_path: Path, *argv: str) -> int:
    """Run main() with argv, logging into tmp_path, and return the exit code."""
    with patch("sys.argv", ["tweetstorm", "--log-dir", str(tmp_path / "logs"), *argv]):
        with pytest.raises(SystemExit) as exc_info:
            main()
    return exc_info.value.code


# =============================================================================
# PARSER TESTS
# =============================================================================


class TestParser:
    """Tests for subcommand registration and defaults."""

    @pytest.mark.unit
    def test_split_defaults(self) -> None:
        args = _create_parser().parse_args(["split", "-i", "draft.txt"])
        assert args.command == "split"
        assert args.input == Path("draft.txt")
        assert args.output is None
        assert args.max_length == 280
        assert args.fill_column is None
        assert args.verbose is False

    @pytest.mark.unit
    def test_split_options(self) -> None:
        args = _create_parser().parse_args(
            ["-v", "split", "-i", "draft.txt", "-o", "out.txt", "--max-length", "500", "--fill-column", "72"]
        )
        assert args.verbose is True
        assert args.output == Path("out.txt")
        assert args.max_length == 500
        assert args.fill_column == 72

    @pytest.mark.unit
    def test_export_requires_output(self) -> None:
        with pytest.raises(SystemExit):
            _create_parser().parse_args(["export", "-i", "thread.txt"])

    @pytest.mark.unit
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("sys.argv", ["tweetstorm"]):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 0
        assert "split" in capsys.readouterr().out


# =============================================================================
# PROCESS TESTS
# =============================================================================


class TestSplitCommand:
    """Tests for the split subcommand."""

    @pytest.mark.unit
    @pytest.mark.parametrize("command", ["split", "refresh", "join"])
    def test_missing_input_exits_1(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str], command: str
    ) -> None:
        code = _run(tmp_path, command, "-i", str(tmp_path / "missing.txt"))

        assert code == 1
        assert "does not exist" in capsys.readouterr().out

    @pytest.mark.unit
    def test_split_writes_output(self, tmp_path: Path, three_sentence_text: str) -> None:
        source = tmp_path / "draft.txt"
        source.write_text(three_sentence_text, encoding="utf-8")
        output = tmp_path / "out" / "thread.txt"

        code = _run(tmp_path, "split", "-i", str(source), "-o", str(output))

        assert code == 0
        text = output.read_text(encoding="utf-8")
        assert [int(m.group(2)) for m in SEPARATOR_PATTERN.finditer(text)] == [206, 206, 206, 0]
        assert "(3/3)" in text

    @pytest.mark.unit
    def test_split_to_stdout(self, tmp_path: Path, short_text: str, capsys: pytest.CaptureFixture[str]) -> None:
        source = tmp_path / "draft.txt"
        source.write_text(short_text, encoding="utf-8")

        code = _run(tmp_path, "split", "-i", str(source))

        assert code == 0
        assert capsys.readouterr().out == render_separator(50, 280) + short_text + render_closing_separator(280)

    @pytest.mark.unit
    def test_split_unchunkable_exits_1(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        source = tmp_path / "draft.txt"
        source.write_text("z" * 500, encoding="utf-8")

        code = _run(tmp_path, "split", "-i", str(source), "-o", str(tmp_path / "out.txt"))

        assert code == 1
        assert "Cannot place a chunk boundary" in capsys.readouterr().out
        assert not (tmp_path / "out.txt").exists()

    @pytest.mark.unit
    def test_split_invalid_max_length_exits_1(
        self, tmp_path: Path, short_text: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        source = tmp_path / "draft.txt"
        source.write_text(short_text, encoding="utf-8")

        code = _run(tmp_path, "split", "-i", str(source), "--max-length", "5")

        assert code == 1
        assert "max_length" in capsys.readouterr().out

    @pytest.mark.unit
    def test_log_file_created(self, tmp_path: Path, short_text: str) -> None:
        source = tmp_path / "draft.txt"
        source.write_text(short_text, encoding="utf-8")

        _run(tmp_path, "split", "-i", str(source), "-o", str(tmp_path / "out.txt"))

        assert list((tmp_path / "logs").glob("tweetstorm_*.log"))


class TestFollowUpCommands:
    """Tests for refresh, export and join."""

    @pytest.mark.unit
    def test_refresh_overwrites_input(self, tmp_path: Path, build_thread: Callable[..., str]) -> None:
        thread = tmp_path / "thread.txt"
        thread.write_text(build_thread(["Edited by hand.", "Also edited."]), encoding="utf-8")

        code = _run(tmp_path, "refresh", "-i", str(thread))

        assert code == 0
        text = thread.read_text(encoding="utf-8")
        assert [int(m.group(2)) for m in SEPARATOR_PATTERN.finditer(text)] == [15, 12, 0]

    @pytest.mark.unit
    def test_refresh_without_tweets_exits_1(self, tmp_path: Path) -> None:
        plain = tmp_path / "plain.txt"
        plain.write_text("Nothing split here.", encoding="utf-8")

        assert _run(tmp_path, "refresh", "-i", str(plain)) == 1

    @pytest.mark.unit
    def test_export_writes_jsonl(self, tmp_path: Path, build_thread: Callable[..., str]) -> None:
        thread = tmp_path / "thread.txt"
        thread.write_text(build_thread(["One. (1/2)", "Two. (2/2)"]), encoding="utf-8")
        output = tmp_path / "thread.jsonl"

        code = _run(tmp_path, "export", "-i", str(thread), "-o", str(output))

        assert code == 0
        records = [json.loads(line) for line in output.read_text(encoding="utf-8").splitlines()]
        assert [r["index"] for r in records] == [1, 2]

    @pytest.mark.unit
    def test_join_recovers_prose(self, tmp_path: Path, build_thread: Callable[..., str]) -> None:
        thread = tmp_path / "thread.txt"
        thread.write_text(build_thread(["One. (1/2)", "Two. (2/2)"]), encoding="utf-8")
        output = tmp_path / "prose.txt"

        code = _run(tmp_path, "join", "-i", str(thread), "-o", str(output))

        assert code == 0
        assert output.read_text(encoding="utf-8") == "One. Two.\n"
