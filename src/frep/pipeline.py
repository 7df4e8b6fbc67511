"""
Reads lines from the input stream, plans each one, and writes the result.

Lines are processed strictly in order: the output for line N is written
before line N+1 is read.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, TextIO

import regex

from .config import DEFAULT_DELIMITER
from .errors import InvalidConfigurationError, PatternCompilationError, StreamError
from .types import Line

if TYPE_CHECKING:
    from .planner import SubstitutionPlanner

logger = logging.getLogger(__name__)

__all__ = ["LineReader", "PipelineStats", "compile_delimiter", "run_pipeline"]


def compile_delimiter(delimiter: str = DEFAULT_DELIMITER) -> regex.Pattern[str]:
    """
    Compile the regex that separates lines.

    Raises:
        PatternCompilationError: If ``delimiter`` is not a valid regex.
        InvalidConfigurationError: If ``delimiter`` matches the empty string.

    """
    try:
        compiled = regex.compile(delimiter)
    except regex.error as e:
        raise PatternCompilationError(delimiter, str(e)) from e
    if compiled.fullmatch(""):
        msg = f"Invalid configuration: the delimiter '{delimiter}' matches an empty string"
        raise InvalidConfigurationError(msg)
    return compiled


class LineReader:
    """
    Split a text stream into Line values.

    The stream is pulled one physical line at a time. A delimiter that could
    still be completed by the next read (a partial match at the end of the
    buffer) is held back until more input arrives or the stream ends.

    A custom delimiter whose complete match reaches the end of the data read
    so far is held back as well, because the next read may extend it (think
    ``\\n+``). The default delimiter cannot grow past its newline, so its lines
    are released as soon as they are read.

    Each search resumes where the previous one gave up, so a delimiter that
    rarely or never occurs costs linear time, not a rescan per read.
    """

    def __init__(self, stream: TextIO, delimiter: regex.Pattern[str] | None = None) -> None:
        """
        Initialize the reader.

        Args:
            stream: A text stream opened without newline translation.
            delimiter: The compiled line delimiter; defaults to ``\\r?\\n``.

        """
        self._stream = stream
        self._delimiter = delimiter if delimiter is not None else compile_delimiter()
        self._hold_open_matches = self._delimiter.pattern != DEFAULT_DELIMITER

    def __iter__(self) -> Iterator[Line]:
        """Yield lines in input order, the last one possibly unterminated."""
        buffer = ""
        resume = 0
        for piece in iter(self._stream.readline, ""):
            buffer += piece
            lines, buffer, resume = self._split(buffer, resume, final=False)
            yield from lines

        lines, rest, _ = self._split(buffer, resume, final=True)
        yield from lines
        if rest:
            yield Line(rest)

    def _split(self, buffer: str, search_from: int, *, final: bool) -> tuple[list[Line], str, int]:
        """
        Cut every complete line off ``buffer``.

        No delimiter can start in ``buffer[:search_from]``; the scan begins
        there.

        Returns:
            The complete lines, the unconsumed remainder, and the offset in the
            remainder where the next scan should begin.

        """
        lines: list[Line] = []
        start = 0
        end_of_data = len(buffer)

        while search_from <= end_of_data:
            found = self._delimiter.search(buffer, search_from, partial=not final)
            if found is None:
                search_from = end_of_data
                break
            if found.partial:
                search_from = found.start()
                break
            if found.start() == found.end():
                search_from = found.end() + 1
                continue
            if not final and self._hold_open_matches and found.end() == end_of_data:
                search_from = found.start()
                break
            lines.append(Line(buffer[start : found.start()], found.group()))
            start = search_from = found.end()

        return lines, buffer[start:], min(search_from, end_of_data) - start


@dataclass
class PipelineStats:
    """Counters collected over one pipeline run."""

    lines_read: int = 0
    lines_changed: int = 0
    fragments_written: int = 0


def run_pipeline(lines: Iterator[Line] | LineReader, outstream: TextIO, planner: SubstitutionPlanner) -> PipelineStats:
    """
    Plan every line and write its fragments to ``outstream``.

    Args:
        lines: The input lines, usually a LineReader.
        outstream: The text stream receiving the output.
        planner: Produces the fragments for each line.

    Returns:
        Counters describing the run.

    Raises:
        StreamError: If reading or writing fails, or the output encoding
            cannot represent the text being written.

    """
    stats = PipelineStats()
    try:
        for line in lines:
            stats.lines_read += 1
            fragments = planner.plan(line)
            output = "".join(fragments)
            if output != line.text + line.terminator:
                stats.lines_changed += 1
            if output:
                outstream.write(output)
            stats.fragments_written += len(fragments)
        outstream.flush()
    except BrokenPipeError:
        raise
    except OSError as e:
        msg = f"I/O error: {e}"
        raise StreamError(msg) from e
    except UnicodeEncodeError as e:
        msg = f"Cannot encode output as {e.encoding}: {e.reason}"
        raise StreamError(msg) from e

    logger.debug(
        "Pipeline finished: %d line(s) read, %d changed, %d fragment(s) written",
        stats.lines_read,
        stats.lines_changed,
        stats.fragments_written,
    )
    return stats
