"""Failure taxonomy for catalog reads.

Both failures collapse to "no data" at the CategoryDirectory and
CatalogQueryController boundaries; only CatalogClient raises them.
"""


class CatalogError(Exception):
    """Base class for catalog read failures."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


class TransportFailure(CatalogError):
    """Network unreachable, timeout, or non-2xx status."""

    def __init__(self, message: str, path: str = "", status_code: int = None):
        super().__init__(message, path)
        self.status_code = status_code


class ParseFailure(CatalogError):
    """Response body is not the expected JSON document."""
