"""
Catalog error hierarchy

Every stage of the catalog pipeline (fetch, parser selection, parse) raises a
subclass of CatalogError, so callers only need to handle one failure type.
The technical cause is always chained via ``raise ... from``.
"""


FETCH_FAILED_MESSAGE = "Failed to fetch remote source, check network connectivity"


class CatalogError(Exception):
    """Raised when a channel catalog cannot be produced."""


class FetchError(CatalogError):
    """Raised when the remote source cannot be retrieved.

    ``str(error)`` is the user-facing message; ``reason`` holds the technical
    description for diagnostics.
    """

    def __init__(self, reason: str, message: str = FETCH_FAILED_MESSAGE):
        super().__init__(message)
        self.reason = reason


class NoParserError(CatalogError):
    """Raised when no registered parser accepts the source content."""

    def __init__(self, url: str):
        super().__init__(f"No parser supports source: {url}")
        self.url = url


class ParseError(CatalogError):
    """Raised when a selected parser fails on content it claimed to support."""

    def __init__(self, parser_name: str, detail: str):
        super().__init__(f"{parser_name} failed to parse source: {detail}")
        self.parser_name = parser_name
