"""
Matchers locate the next occurrence of a pattern in a line.

Two variants share one capability, ``next_match(line, offset)``:

- RegexMatcher: delegates to the ``regex`` engine's leftmost search.
- LiteralMatcher: plain substring search.

The planner only ever sees the ``Matcher`` union, so it stays unaware of the
matching mode.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

import regex

from .errors import PatternCompilationError
from .types import Match

logger = logging.getLogger(__name__)

__all__ = ["LiteralMatcher", "Matcher", "RegexMatcher", "compile_matcher"]


@dataclass(frozen=True)
class RegexMatcher:
    """Find matches of a compiled regular expression."""

    pattern: regex.Pattern[str]

    @property
    def group_count(self) -> int:
        """Return the number of capture groups in the pattern."""
        return self.pattern.groups

    @property
    def group_names(self) -> Mapping[str, int]:
        """Return the mapping of named groups to their numeric index."""
        return dict(self.pattern.groupindex)

    def next_match(self, line: str, offset: int) -> Match | None:
        """
        Return the leftmost match starting at or after ``offset``.

        The search sees the whole line, so look-behinds and ``\\b`` can
        inspect text before ``offset``. An offset past the end of the line
        never matches.
        """
        if offset > len(line):
            return None
        found = self.pattern.search(line, offset)
        if found is None:
            return None
        groups = tuple(
            None if found.start(index) < 0 else found.span(index)
            for index in range(1, self.pattern.groups + 1)
        )
        return Match(found.start(), found.end(), groups)


@dataclass(frozen=True)
class LiteralMatcher:
    """Find verbatim occurrences of a fixed string."""

    needle: str

    @property
    def group_count(self) -> int:
        """Literal patterns have no capture groups."""
        return 0

    @property
    def group_names(self) -> Mapping[str, int]:
        """Literal patterns have no named groups."""
        return {}

    def next_match(self, line: str, offset: int) -> Match | None:
        """Return the first occurrence of the needle at or after ``offset``."""
        if offset > len(line):
            return None
        start = line.find(self.needle, offset)
        if start < 0:
            return None
        return Match(start, start + len(self.needle))


Matcher = RegexMatcher | LiteralMatcher


def compile_matcher(pattern: str, *, simple: bool = False) -> Matcher:
    """
    Build the matcher for ``pattern``.

    Args:
        pattern: The pattern text supplied by the user.
        simple: If True, match ``pattern`` verbatim instead of as a regex.

    Returns:
        A LiteralMatcher or RegexMatcher.

    Raises:
        PatternCompilationError: If ``pattern`` is not a valid regex.

    """
    if simple:
        logger.debug("Using literal matching for pattern %r", pattern)
        return LiteralMatcher(pattern)

    try:
        compiled = regex.compile(pattern)
    except regex.error as e:
        raise PatternCompilationError(pattern, str(e)) from e

    logger.debug("Compiled regex %r with %d capture group(s)", pattern, compiled.groups)
    return RegexMatcher(compiled)
