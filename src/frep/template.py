"""
Replacement templates.

A template is parsed once at startup into literal spans and capture-group
references, then expanded against every match.

Placeholder syntax:

- ``$N`` / ``${N}``: capture group N (``$0`` is the whole match).
- ``$name`` / ``${name}``: a named capture group.
- ``$$``: a literal dollar sign.

Any other ``$`` is kept as is. References to groups the pattern does not have
expand to an empty string.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

import regex

from .types import GroupRef, Literal, Match, Segment

logger = logging.getLogger(__name__)

__all__ = ["ReplacementTemplate", "parse_template"]

_PLACEHOLDER = regex.compile(
    r"""
    \$(?:
        (?P<dollar>\$)
      | \{(?P<braced>[0-9A-Za-z_]+)\}
      | (?P<number>[0-9]+)
      | (?P<name>[A-Za-z_][0-9A-Za-z_]*)
    )
    """,
    regex.VERBOSE,
)


@dataclass(frozen=True)
class ReplacementTemplate:
    """An ordered sequence of literal and group-reference segments."""

    segments: tuple[Segment, ...] = ()

    @classmethod
    def verbatim(cls, text: str) -> ReplacementTemplate:
        """Build a template that always expands to ``text`` unchanged."""
        return cls((Literal(text),) if text else ())

    @property
    def group_indices(self) -> list[int]:
        """Return the group indices referenced by this template, in order."""
        return [segment.index for segment in self.segments if isinstance(segment, GroupRef)]

    def expand(self, line: str, match: Match) -> str:
        """
        Expand the template against ``match`` found in ``line``.

        Args:
            line: The line the match was found in.
            match: The current match; groups are resolved against it only.

        Returns:
            The replacement text for this occurrence.

        """
        parts: list[str] = []
        for segment in self.segments:
            if isinstance(segment, Literal):
                parts.append(segment.text)
            else:
                parts.append(match.group_text(line, segment.index))
        return "".join(parts)


def _resolve_reference(token: str, group_names: Mapping[str, int]) -> int | None:
    """Turn a placeholder body into a group index, or None for unknown names."""
    if token.isdigit():
        return int(token)
    return group_names.get(token)


def parse_template(
    text: str,
    *,
    group_count: int = 0,
    group_names: Mapping[str, int] | None = None,
) -> ReplacementTemplate:
    """
    Parse replacement ``text`` into a ReplacementTemplate.

    Named references are resolved to numeric indices here so expansion never
    has to look names up. Unknown names and indices above ``group_count``
    are accepted and expand to nothing; a warning is logged once for each.

    Args:
        text: The raw replacement text.
        group_count: The number of capture groups in the pattern.
        group_names: Mapping of named groups to their indices.

    Returns:
        The parsed template.

    """
    names = group_names or {}
    segments: list[Segment] = []
    pending = ""
    position = 0

    for placeholder in _PLACEHOLDER.finditer(text):
        pending += text[position : placeholder.start()]
        position = placeholder.end()

        if placeholder.group("dollar"):
            pending += "$"
            continue

        token = placeholder.group("braced") or placeholder.group("number") or placeholder.group("name")
        index = _resolve_reference(token, names)
        if index is None:
            logger.warning("Replacement refers to unknown group '%s'; it will expand to nothing.", token)
            continue
        if index > group_count:
            logger.warning(
                "Replacement refers to group %d but the pattern has %d group(s); it will expand to nothing.",
                index,
                group_count,
            )

        if pending:
            segments.append(Literal(pending))
            pending = ""
        segments.append(GroupRef(index))

    pending += text[position:]
    if pending:
        segments.append(Literal(pending))

    logger.debug("Parsed replacement %r into %d segment(s)", text, len(segments))
    return ReplacementTemplate(tuple(segments))
