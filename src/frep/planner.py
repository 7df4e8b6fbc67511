"""
Plans the output of a single line.

The planner performs one left-to-right scan of the line, the same as one pass
of a global search-and-replace with an optional cap on the number of matches.
It is mode-agnostic: it only calls ``matcher.next_match``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import RunConfig
    from .matcher import Matcher
    from .template import ReplacementTemplate
    from .types import Line

__all__ = ["EXTRACT_TERMINATOR", "SubstitutionPlanner", "process_line"]

# Every extracted piece is written as its own output line.
EXTRACT_TERMINATOR = "\n"


def process_line(
    line: Line,
    matcher: Matcher,
    template: ReplacementTemplate | None,
    config: RunConfig,
) -> list[str]:
    """
    Produce the output fragments for ``line``.

    In replace mode the fragments rebuild the line: verbatim text between
    matches, the expansion (or the match itself when there is no template)
    in place of each match, then the untouched tail and the original
    terminator. In extract mode only the acted-upon pieces are returned,
    each followed by a newline.

    Args:
        line: The line to process.
        matcher: Locates the matches.
        template: The replacement template, or None to keep matches as they are.
        config: Bound and output-mode options.

    Returns:
        The fragments to write, in order. Joining them gives the output.

    """
    text = line.text
    limit = config.max_per_line
    extract = config.extract_only
    fragments: list[str] = []

    cursor = 0
    search_from = 0
    count = 0

    while limit is None or count < limit:
        match = matcher.next_match(text, search_from)
        if match is None:
            break

        piece = template.expand(text, match) if template is not None else text[match.start : match.end]
        if extract:
            fragments.append(piece)
            fragments.append(EXTRACT_TERMINATOR)
        else:
            fragments.append(text[cursor : match.start])
            fragments.append(piece)

        count += 1
        cursor = match.end
        # A zero-width match must not be found again at the same offset.
        search_from = match.end + 1 if match.is_empty else match.end

    if not extract:
        fragments.append(text[cursor:])
        if line.terminator:
            fragments.append(line.terminator)

    return [fragment for fragment in fragments if fragment]


@dataclass(frozen=True)
class SubstitutionPlanner:
    """Binds a matcher, template and config so lines can be planned one by one."""

    matcher: Matcher
    template: ReplacementTemplate | None
    config: RunConfig

    def plan(self, line: Line) -> list[str]:
        """Return the output fragments for ``line``."""
        return process_line(line, self.matcher, self.template, self.config)
