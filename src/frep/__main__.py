"""Main entry point for the frep command-line interface."""

import argparse
import logging
import os
import sys
from pathlib import Path

from . import __version__
from .config import DEFAULT_DELIMITER, DEFAULT_ENCODING, Settings
from .errors import FrepError
from .logging_utils import setup_logging
from .workflow import run

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments for the frep CLI.

    Returns:
        argparse.Namespace: An object containing the parsed command-line arguments.

    """
    parser = argparse.ArgumentParser(
        prog="frep",
        description="Find and replace (or extract) a pattern in text, line by line.",
    )
    parser.add_argument("pattern", help="Pattern to find.")
    parser.add_argument(
        "replacement",
        nargs="?",
        default=None,
        help="Optional replacement; $N, ${N} and $name refer to capture groups, $$ is a literal '$'. "
        "Without it, only the matches are printed.",
    )
    parser.add_argument(
        "-m",
        "--max",
        type=int,
        default=None,
        metavar="N",
        help="Maximum number of replacements per line (default is all).",
    )
    parser.add_argument(
        "-x",
        "--extract",
        action="store_true",
        help="Print only what was found, one match per line (default is print everything).",
    )
    parser.add_argument(
        "-s",
        "--simple",
        action="store_true",
        help="Do simple verbatim string matching (default is regex matching).",
    )
    parser.add_argument(
        "-d",
        "--delimiter",
        default=DEFAULT_DELIMITER,
        metavar="PATT",
        help=f"Regex separating lines (default: {DEFAULT_DELIMITER}).",
    )
    parser.add_argument("-i", "--input", type=Path, default=None, help="Input file (default is stdin).")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Output file (default is stdout).")
    parser.add_argument(
        "-e",
        "--encoding",
        default=DEFAULT_ENCODING,
        help=f"Text encoding of input and output (default: {DEFAULT_ENCODING}).",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"frep {__version__}",
        help="Show the version number and exit.",
    )
    parser.add_argument("--verbose", action="store_true", help="Report progress on stderr.")
    parser.add_argument("--debug", action="store_true", help="Enable debug level logging.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write detailed debug logs to this file.")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """
    Run the main entry point for the frep command-line interface.

    Orchestrates the entire process:
    1. Parses command-line arguments.
    2. Validates them into Settings.
    3. Runs the filter, exiting non-zero on any fatal error.
    """
    args = _parse_args(argv)
    setup_logging(version=__version__, debug=args.debug, verbose=args.verbose, log_file=args.log_file)

    try:
        settings = Settings.from_args(args)
        logger.debug("Starting run with settings: %s", settings.model_dump_json())
        run(settings)
    except FrepError as e:
        logger.error("%s", e)  # noqa: TRY400
        sys.exit(EXIT_FAILURE)
    except BrokenPipeError:
        # The reader went away; silence the flush at interpreter exit.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        sys.exit(EXIT_FAILURE)
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        sys.exit(EXIT_INTERRUPTED)
    except Exception:
        logger.exception("An unexpected error occurred")
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
