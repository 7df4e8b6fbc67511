"""Wires settings, streams and the engine together for one frep run."""

import io
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from .config import Settings
from .errors import StreamError
from .matcher import compile_matcher
from .pipeline import LineReader, PipelineStats, compile_delimiter, run_pipeline
from .planner import SubstitutionPlanner
from .template import ReplacementTemplate, parse_template

logger = logging.getLogger(__name__)

# Undecodable bytes survive a read/write round trip unchanged.
_ERRORS = "surrogateescape"


def build_planner(settings: Settings) -> SubstitutionPlanner:
    """
    Compile the pattern and template described by ``settings``.

    In literal mode the replacement is used verbatim; placeholders are only
    interpreted for regex patterns.

    Raises:
        PatternCompilationError: If the pattern is not a valid regex.

    """
    matcher = compile_matcher(settings.pattern, simple=settings.run.simple)

    template: ReplacementTemplate | None = None
    if settings.replacement is not None:
        if settings.run.simple:
            template = ReplacementTemplate.verbatim(settings.replacement)
        else:
            template = parse_template(
                settings.replacement,
                group_count=matcher.group_count,
                group_names=matcher.group_names,
            )

    return SubstitutionPlanner(matcher=matcher, template=template, config=settings.run)


@contextmanager
def open_input(path: Path | None, encoding: str) -> Iterator[TextIO]:
    """Open the input file, or wrap stdin, as an untranslated text stream."""
    if path is None:
        wrapper = io.TextIOWrapper(sys.stdin.buffer, encoding=encoding, errors=_ERRORS, newline="\n")
        try:
            yield wrapper
        finally:
            # Leave the process's stdin open.
            wrapper.detach()
        return

    try:
        stream = path.open(encoding=encoding, errors=_ERRORS, newline="\n")
    except OSError as e:
        msg = f"Cannot open input file {path}: {e}"
        raise StreamError(msg) from e
    with stream:
        yield stream


@contextmanager
def open_output(path: Path | None, encoding: str) -> Iterator[TextIO]:
    """Open the output file, or wrap stdout, as an untranslated text stream."""
    if path is None:
        wrapper = io.TextIOWrapper(sys.stdout.buffer, encoding=encoding, errors=_ERRORS, newline="")
        try:
            yield wrapper
        finally:
            # Flushes, then leaves the process's stdout open.
            wrapper.detach()
        return

    try:
        stream = path.open("w", encoding=encoding, errors=_ERRORS, newline="")
    except OSError as e:
        msg = f"Cannot open output file {path}: {e}"
        raise StreamError(msg) from e
    with stream:
        yield stream


def run(settings: Settings) -> PipelineStats:
    """
    Execute a complete frep run.

    The pattern, template and delimiter are compiled before any stream is
    opened, so a bad pattern aborts the run without producing output.

    Args:
        settings: The validated settings for this run.

    Returns:
        Counters describing the run.

    """
    planner = build_planner(settings)
    delimiter = compile_delimiter(settings.delimiter)

    logger.info(
        "Running in %s mode (%s matching, max per line: %s)",
        "extract" if settings.run.extract_only else "replace",
        "literal" if settings.run.simple else "regex",
        "unbounded" if settings.run.max_per_line is None else settings.run.max_per_line,
    )

    with open_input(settings.input_path, settings.encoding) as instream, open_output(settings.output_path, settings.encoding) as outstream:
        stats = run_pipeline(LineReader(instream, delimiter), outstream, planner)

    logger.info("Processed %d line(s), %d changed.", stats.lines_read, stats.lines_changed)
    return stats
