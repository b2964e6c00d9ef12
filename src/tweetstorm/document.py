"""Mutable text document with markers and change notification.

The splitter works on a single document in place: separators are inserted,
boundary whitespace is removed and readouts are rewritten. Positions held
across those edits are kept as markers that shift with the text, the same
way an editor buffer keeps its markers valid.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True)
class Change:
    """A single mutation of a document.

    Attributes:
        start: Position where the change happened
        end: End of the inserted text (equal to start for pure deletions)
        removed: Number of characters removed at start
    """

    start: int
    end: int
    removed: int


class Marker:
    """A position that follows the text it points into.

    Insertions before the marker shift it right, deletions before it shift it
    left, and a deletion spanning it collapses it to the deletion start. An
    insertion exactly at the marker moves it only when ``advance`` is set.
    """

    def __init__(self, position: int, advance: bool = False) -> None:
        self.position = position
        self.advance = advance

    def _adjust(self, change: Change) -> None:
        inserted = change.end - change.start
        if change.removed:
            removed_end = change.start + change.removed
            if self.position >= removed_end:
                self.position -= change.removed
            elif self.position > change.start:
                self.position = change.start
        if inserted:
            if self.position > change.start or (self.position == change.start and self.advance):
                self.position += inserted

    def __int__(self) -> int:
        return self.position

    def __repr__(self) -> str:
        return f"Marker({self.position}, advance={self.advance})"


class Document:
    """Ordered, mutable character sequence.

    Args:
        text: Initial content
    """

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._markers: list[Marker] = []
        self._listeners: list[Callable[[Document, Change], None]] = []
        self._notifying = False

    # =========================================================================
    # READING
    # =========================================================================

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def substring(self, start: int, end: int) -> str:
        self._check_range(start, end)
        return self._text[start:end]

    # =========================================================================
    # EDITING
    # =========================================================================

    def insert(self, position: int, text: str) -> None:
        """Insert text before the character at position."""
        self.replace(position, position, text)

    def delete(self, start: int, end: int) -> None:
        """Delete the characters in [start, end)."""
        self.replace(start, end, "")

    def replace(self, start: int, end: int, text: str) -> None:
        """Replace [start, end) with text and notify listeners.

        Args:
            start: First position to replace
            end: Position after the last replaced character
            text: Replacement text

        Raises:
            IndexError: If the range lies outside the document
        """
        self._check_range(start, end)
        if start == end and not text:
            return

        self._text = self._text[:start] + text + self._text[end:]
        change = Change(start=start, end=start + len(text), removed=end - start)

        for marker in self._markers:
            marker._adjust(change)

        self._notify(change)

    def _notify(self, change: Change) -> None:
        # Edits made by a listener do not re-enter the listeners
        if self._notifying or not self._listeners:
            return
        self._notifying = True
        try:
            for listener in list(self._listeners):
                listener(self, change)
        finally:
            self._notifying = False

    def _check_range(self, start: int, end: int) -> None:
        if not 0 <= start <= end <= len(self._text):
            raise IndexError(f"Range [{start}, {end}) outside document of length {len(self)}")

    # =========================================================================
    # MARKERS AND LISTENERS
    # =========================================================================

    def marker(self, position: int, advance: bool = False) -> Marker:
        """Create a marker at position that tracks subsequent edits."""
        if not 0 <= position <= len(self._text):
            raise IndexError(f"Position {position} outside document of length {len(self)}")
        marker = Marker(position, advance=advance)
        self._markers.append(marker)
        return marker

    def release(self, marker: Marker) -> None:
        """Stop tracking a marker."""
        if marker in self._markers:
            self._markers.remove(marker)

    def add_listener(self, listener: Callable[[Document, Change], None]) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[Document, Change], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # =========================================================================
    # SEARCHING
    # =========================================================================

    def search_forward(
        self,
        pattern: re.Pattern[str],
        position: int,
        bound: int | None = None,
    ) -> re.Match[str] | None:
        """Find the first match starting at or after position.

        Args:
            pattern: Compiled pattern to look for
            position: Where the search starts
            bound: Matches must end at or before this position (default: end)

        Returns:
            The match, or None if there is none
        """
        limit = len(self._text) if bound is None else min(bound, len(self._text))
        if position > limit:
            return None
        return pattern.search(self._text, position, limit)

    def search_backward(
        self,
        pattern: re.Pattern[str],
        position: int,
        bound: int = 0,
    ) -> re.Match[str] | None:
        """Find the last match that ends at or before position.

        Args:
            pattern: Compiled pattern to look for
            position: Matches must end at or before this position
            bound: Matches must start at or after this position

        Returns:
            The match closest to position, or None if there is none
        """
        position = min(position, len(self._text))
        if bound > position:
            return None
        last: re.Match[str] | None = None
        for match in pattern.finditer(self._text, bound, position):
            last = match
        return last

    def skip_whitespace_forward(self, position: int, limit: int | None = None) -> int:
        """Return the first non-whitespace position at or after position."""
        limit = len(self._text) if limit is None else limit
        while position < limit and self._text[position].isspace():
            position += 1
        return position

    def skip_whitespace_backward(self, position: int, floor: int = 0) -> int:
        """Return the position just after the last non-whitespace character before position."""
        while position > floor and self._text[position - 1].isspace():
            position -= 1
        return position
