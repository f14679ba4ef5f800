"""Exception types raised by spanpipe."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple


class SpanPipeError(Exception):
    """Base class for all spanpipe errors."""


class ConfigurationError(SpanPipeError, ValueError):
    """An argument or configuration value is missing or invalid."""


class UnsupportedLanguageError(SpanPipeError, ValueError):
    """Analysis was requested for a language without a registered pipeline."""

    def __init__(self, language: str, supported: Iterable[str] = ()):
        self.language = language
        self.supported: Tuple[str, ...] = tuple(supported)
        listing = ", ".join(self.supported) if self.supported else "none"
        super().__init__(
            f"The language '{language}' is not supported (supported: {listing})"
        )


class PipelineExecutionError(SpanPipeError, RuntimeError):
    """The annotation pipeline raised while processing a text."""

    def __init__(self, language: str, cause: BaseException):
        self.language = language
        self.cause = cause
        super().__init__(
            f"{type(cause).__name__} while processing a '{language}' language text "
            f"(message: {cause})"
        )


class PipelineCancelledError(SpanPipeError, RuntimeError):
    """Waiting for the annotation pipeline was abandoned before it finished."""

    def __init__(self, language: str, reason: Optional[str] = None):
        self.language = language
        self.reason = reason or "cancelled"
        super().__init__(
            f"Processing of a '{language}' language text was interrupted ({self.reason})"
        )


class InvalidSpanError(SpanPipeError, ValueError):
    """Token offsets do not form a valid, ordered span of the text."""
