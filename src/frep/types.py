"""
Immutable value types shared by the matcher, planner and pipeline.

Offsets are character offsets into the decoded line. Ranges are half-open,
``[start, end)``, like Python slices.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Match:
    """
    A single occurrence of the pattern within one line.

    Attributes:
        start: Offset of the first matched character.
        end: Offset one past the last matched character.
        groups: Captured ranges for groups 1..N, ``None`` where a group did
            not take part in the match. Always empty for literal patterns.

    """

    start: int
    end: int
    groups: tuple[tuple[int, int] | None, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Check whether this is a zero-width match."""
        return self.start == self.end

    def span(self, index: int) -> tuple[int, int] | None:
        """
        Return the range captured by group ``index``.

        Group 0 is the whole match. Unknown or non-participating groups
        return ``None``.
        """
        if index == 0:
            return (self.start, self.end)
        if 0 < index <= len(self.groups):
            return self.groups[index - 1]
        return None

    def group_text(self, line: str, index: int) -> str:
        """Return the text of group ``index`` in ``line``, or an empty string."""
        captured = self.span(index)
        if captured is None:
            return ""
        return line[captured[0] : captured[1]]


@dataclass(frozen=True)
class Line:
    """One input line and the terminator that ended it."""

    text: str
    terminator: str = ""


@dataclass(frozen=True)
class Literal:
    """A template segment copied verbatim into the output."""

    text: str


@dataclass(frozen=True)
class GroupRef:
    """A template segment replaced by what capture group ``index`` matched."""

    index: int


Segment = Literal | GroupRef
