"""Exceptions raised by the audit pipeline."""


class AuditError(Exception):
    """Base class for all audit errors."""


class ValidationError(AuditError):
    """The submitted URL is malformed or points at a disallowed host."""


class UnsupportedContentError(AuditError):
    """The fetched resource is not an HTML document."""

    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(f"Resource is not HTML (content-type: {content_type or 'missing'})")


class FetchError(AuditError):
    """The page could not be retrieved (DNS, TLS, timeout, redirects)."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Failed to fetch {url}: {message}")


class PageSpeedError(AuditError):
    """Raised when a PageSpeed API request fails."""
