"""Tests for the regex and literal matchers."""

import pytest

from frep.errors import PatternCompilationError
from frep.matcher import LiteralMatcher, RegexMatcher, compile_matcher
from frep.types import Match


def test_compile_matcher_selects_regex_by_default() -> None:
    """Without the simple flag the pattern is compiled as a regex."""
    matcher = compile_matcher(r"\d+")
    assert isinstance(matcher, RegexMatcher)


def test_compile_matcher_selects_literal_in_simple_mode() -> None:
    """The simple flag keeps the pattern as a verbatim string."""
    matcher = compile_matcher(r"\d+", simple=True)
    assert isinstance(matcher, LiteralMatcher)
    assert matcher.needle == r"\d+"


def test_invalid_regex_raises_pattern_compilation_error() -> None:
    """A malformed regex is reported once, when the matcher is built."""
    with pytest.raises(PatternCompilationError) as exc_info:
        compile_matcher("([a-z]")
    assert exc_info.value.pattern == "([a-z]"
    assert "regex error" in str(exc_info.value)


def test_invalid_regex_is_fine_in_simple_mode() -> None:
    """Regex syntax is meaningless for literal patterns."""
    matcher = compile_matcher("([a-z]", simple=True)
    assert matcher.next_match("x([a-z]y", 0) == Match(1, 7)


def test_regex_next_match_from_offset() -> None:
    """The search starts at the given offset."""
    matcher = compile_matcher("o")
    assert matcher.next_match("foo", 0) == Match(1, 2)
    assert matcher.next_match("foo", 2) == Match(2, 3)
    assert matcher.next_match("foo", 3) is None


def test_regex_reports_capture_groups() -> None:
    """Each capture group range is reported in order."""
    matcher = compile_matcher(r"(\w+)@(\w+)")
    match = matcher.next_match("mail me@host now", 0)
    assert match == Match(5, 12, ((5, 7), (8, 12)))


def test_regex_non_participating_group_is_none() -> None:
    """A group that did not take part in the match is reported as None."""
    matcher = compile_matcher("(a)|(b)")
    match = matcher.next_match("xb", 0)
    assert match is not None
    assert match.groups == (None, (1, 2))
    assert match.span(1) is None
    assert match.group_text("xb", 1) == ""
    assert match.group_text("xb", 2) == "b"


def test_regex_lookbehind_sees_text_before_offset() -> None:
    """The whole line stays visible to the engine, not just the tail."""
    matcher = compile_matcher(r"(?<=a)b")
    assert matcher.next_match("ab", 1) == Match(1, 2)


def test_regex_zero_width_match() -> None:
    """An end anchor yields a zero-width match."""
    matcher = compile_matcher("$")
    match = matcher.next_match("abc", 0)
    assert match == Match(3, 3)
    assert match.is_empty


def test_regex_offset_past_end_never_matches() -> None:
    """Offsets beyond the line length stop the scan, even for empty patterns."""
    matcher = compile_matcher("x*")
    assert matcher.next_match("ab", 2) == Match(2, 2)
    assert matcher.next_match("ab", 3) is None


def test_regex_group_metadata() -> None:
    """Group count and names come from the compiled pattern."""
    matcher = compile_matcher(r"(?P<user>\w+)@(\w+)")
    assert matcher.group_count == 2
    assert matcher.group_names == {"user": 1}


def test_regex_unicode_classes() -> None:
    """Lines are text, so word classes cover non-ASCII letters."""
    matcher = compile_matcher(r"\w+")
    assert matcher.next_match("  café", 0) == Match(2, 6)


def test_literal_next_match() -> None:
    """Literal matching finds exact substrings, special characters included."""
    matcher = LiteralMatcher("...")
    assert matcher.next_match("amet...", 0) == Match(4, 7)
    assert matcher.next_match("amet...", 5) is None


def test_literal_has_no_groups() -> None:
    """Literal matches never carry capture groups."""
    matcher = LiteralMatcher("a")
    assert matcher.group_count == 0
    assert matcher.group_names == {}
    match = matcher.next_match("cat", 0)
    assert match is not None
    assert match.groups == ()
    assert match.group_text("cat", 0) == "a"
    assert match.group_text("cat", 1) == ""


def test_literal_empty_needle_is_zero_width() -> None:
    """The empty literal matches at every offset up to the end of the line."""
    matcher = LiteralMatcher("")
    assert matcher.next_match("ab", 0) == Match(0, 0)
    assert matcher.next_match("ab", 2) == Match(2, 2)
    assert matcher.next_match("ab", 3) is None
