"""Exception hierarchy for feed ingestion."""


class FeedError(Exception):
    """Base class for all feed ingestion errors."""


class TransportError(FeedError):
    """Raised when a document could not be retrieved.

    ``status_code`` is ``None`` when the request failed before any
    response was received (DNS, connection reset, timeout...).
    """

    def __init__(self, url: str, status_code: int | None = None, reason: str = ""):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        if status_code is not None:
            message = f'Request to "{url}" returned status code {status_code}'
        else:
            message = f'Request to "{url}" failed: {reason}'
        super().__init__(message)


class MalformedDocumentError(FeedError):
    """Raised when a feed document cannot be parsed as XML."""


class OversizeInputError(FeedError):
    """Raised when an HTML document is too large for feed discovery."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Input of {size} bytes exceeds the {limit} byte limit")


class NoFeedFoundError(FeedError):
    """Raised when an HTML page links to no usable RSS/Atom feed."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f'No embedded RSS/Atom feed links found at "{url}"')


class DateParseError(FeedError, ValueError):
    """Raised when a date string matches none of the supported formats."""

    def __init__(self, value: str, errors: list[str] | None = None):
        self.value = value
        self.errors = errors or []
        message = f"Couldn't parse date: {value!r}"
        if self.errors:
            message += ". Possible errors: " + "; ".join(self.errors)
        super().__init__(message)
