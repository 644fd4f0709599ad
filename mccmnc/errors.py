"""Exception hierarchy for mccmnc.

Every failure the pipeline can hit is terminal for the run.  Callers that
want a single ``except`` clause catch :class:`MccMncError`.
"""

from __future__ import annotations


class MccMncError(RuntimeError):
    """Base class for all errors raised by mccmnc."""


class ConfigError(MccMncError):
    """Raised when a settings file or environment override is invalid."""


class NotFoundError(MccMncError):
    """Raised when an expected link or page structure is missing.

    Usually means the publisher changed its site layout, or the listing
    is empty.
    """


class FetchError(MccMncError):
    """Raised when a URL cannot be fetched.

    Attributes:
        url    -- the URL that failed
        status -- HTTP status code (0 if no response was received)
    """

    def __init__(self, message: str, url: str = "", status: int = 0) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class ConversionError(MccMncError):
    """Raised when the .docx document cannot be converted to HTML."""


class ParseError(MccMncError):
    """Raised when the data table breaks the expected row layout."""
