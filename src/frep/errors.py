"""Fatal error kinds raised while building or running a frep job."""

__all__ = [
    "FrepError",
    "InvalidConfigurationError",
    "PatternCompilationError",
    "StreamError",
]


class FrepError(Exception):
    """Base class for every error frep reports to the user."""


class PatternCompilationError(FrepError):
    """A pattern (or delimiter) is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        """
        Store the offending pattern alongside the engine's explanation.

        Args:
            pattern: The pattern text that failed to compile.
            reason: The message reported by the regex engine.

        """
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"regex error in '{pattern}': {reason}")


class InvalidConfigurationError(FrepError):
    """The run configuration is rejected before any input is read."""


class StreamError(FrepError):
    """The input or output stream cannot be opened, read, or written."""
