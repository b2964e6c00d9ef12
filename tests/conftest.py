"""Shared pytest fixtures for tweetstorm tests."""

from collections.abc import Callable

import pytest

from tweetstorm.splitter import SEPARATOR_PATTERN, render_closing_separator, render_separator


def _make_sentence(length: int, word: str = "lorem") -> str:
    """Build a sentence of exactly length characters ending in a period."""
    filler = (f"{word} " * (length // (len(word) + 1) + 2))[: length - 1]
    if filler.endswith(" "):
        filler = filler[:-1] + word[0]
    return filler + "."


# =============================================================================
# TEXT FIXTURES
# =============================================================================


@pytest.fixture
def make_sentence() -> Callable[..., str]:
    """Factory fixture for sentences of an exact length.

    Usage:
        def test_something(make_sentence):
            sentence = make_sentence(200)
    """
    return _make_sentence


@pytest.fixture
def short_text() -> str:
    """A 50-character single sentence."""
    text = "The quick brown fox jumps over the lazy dog today."
    assert len(text) == 50
    return text


@pytest.fixture
def three_sentences() -> list[str]:
    """Three distinct 200-character sentences."""
    return [
        _make_sentence(200, "alpha"),
        _make_sentence(200, "bravo"),
        _make_sentence(200, "delta"),
    ]


@pytest.fixture
def three_sentence_text(three_sentences: list[str]) -> str:
    """Three 200-character sentences joined by single spaces."""
    return " ".join(three_sentences)


@pytest.fixture
def prose_text() -> str:
    """Several paragraphs of mixed sentence lengths, one sentence far over budget."""
    run_on = (
        "The committee spent the afternoon going through every single line item "
        "in the proposed budget, arguing about the cost of paper clips and toner "
        "cartridges and whether the break room really needed a second coffee machine, "
        "while outside the window the rain kept falling on the half-finished parking "
        "structure that nobody had approved and nobody could explain"
    )
    return (
        "Writing a thread is harder than it looks. Every post has to stand on its own, "
        "yet the whole sequence should read like one piece of prose. Short sentences help. "
        "So do clear transitions between ideas.\n\n"
        f"{run_on}. That was the first meeting.\n\n"
        "The second meeting went better! People arrived on time, the agenda was short, "
        "and the budget passed without a single amendment. Was anybody surprised? "
        "Not really, since the chair had spent the week before lobbying every member "
        "in private. By the end of the month the parking structure was finished, the "
        "coffee machines were installed, and the paper clips were never mentioned again.\n\n"
        "Sometimes the process is the point. Sometimes it is just the process."
    )


# =============================================================================
# DOCUMENT FIXTURES
# =============================================================================


@pytest.fixture
def build_thread() -> Callable[..., str]:
    """Factory fixture assembling a split document from chunk bodies.

    Every readout starts at 0 so tests can check that tracking fills it in.
    The thread ends with a closing separator.
    """

    def _build(bodies: list[str], max_length: int = 280) -> str:
        separator = render_separator(0, max_length)
        return separator + separator.join(bodies) + render_closing_separator(max_length)

    return _build


@pytest.fixture
def readouts() -> Callable[[str], list[int]]:
    """Factory fixture returning the length readout of every separator, in order."""

    def _readouts(text: str) -> list[int]:
        return [int(match.group(2)) for match in SEPARATOR_PATTERN.finditer(text)]

    return _readouts
