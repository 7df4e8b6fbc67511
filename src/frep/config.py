"""Builds and validates the configuration of a frep run."""

import argparse
import codecs
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, NonNegativeInt, ValidationError, field_validator, model_validator

from .errors import InvalidConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = r"\r?\n"
DEFAULT_ENCODING = "utf-8"


class RunConfig(BaseModel):
    """
    Per-run matching options, read-only once built.

    Attributes:
        max_per_line: Maximum number of matches acted upon in each line.
            ``None`` means unbounded; ``0`` acts on no match at all.
        extract_only: Emit only the matched (or expanded) text, one per line.
        simple: Match the pattern verbatim instead of as a regex.

    """

    model_config = ConfigDict(frozen=True)

    max_per_line: NonNegativeInt | None = None
    extract_only: bool = False
    simple: bool = False


class Settings(BaseModel):
    """Everything needed to build the engine and open the streams."""

    model_config = ConfigDict(frozen=True)

    pattern: str
    replacement: str | None = None
    run: RunConfig = RunConfig()
    delimiter: str = DEFAULT_DELIMITER
    encoding: str = DEFAULT_ENCODING
    input_path: Path | None = None
    output_path: Path | None = None

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        """Reject encodings the codecs registry does not know."""
        try:
            codecs.lookup(value)
        except LookupError as e:
            msg = f"unknown encoding: {value}"
            raise ValueError(msg) from e
        return value

    @field_validator("delimiter")
    @classmethod
    def _check_delimiter(cls, value: str) -> str:
        """Reject an empty delimiter, which could never split anything."""
        if not value:
            msg = "the delimiter must not be empty"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def _check_replacement_encodable(self) -> "Settings":
        """Reject a replacement the output encoding cannot represent."""
        if self.replacement is None:
            return self
        try:
            self.replacement.encode(self.encoding, errors="surrogateescape")
        except UnicodeEncodeError as e:
            bad = self.replacement[e.start : e.end]
            msg = f"the replacement contains {bad!r}, which the {self.encoding} encoding cannot represent"
            raise ValueError(msg) from e
        return self

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Settings":
        """
        Create Settings from parsed command-line arguments.

        Omitting the replacement implies extraction: with nothing to
        substitute, the only useful output is the matches themselves.

        Raises:
            InvalidConfigurationError: If any option fails validation.

        """
        extract = args.extract or args.replacement is None
        try:
            return cls(
                pattern=args.pattern,
                replacement=args.replacement,
                run=RunConfig(
                    max_per_line=args.max,
                    extract_only=extract,
                    simple=args.simple,
                ),
                delimiter=args.delimiter,
                encoding=args.encoding,
                input_path=args.input,
                output_path=args.output,
            )
        except ValidationError as e:
            msg = f"Invalid configuration: {_describe(e)}"
            raise InvalidConfigurationError(msg) from e


def _describe(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one readable line."""
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        parts.append(f"{location}: {detail['msg']}" if location else detail["msg"])
    return "; ".join(parts)
