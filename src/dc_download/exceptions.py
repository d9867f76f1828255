"""Exceptions raised by dc_download.

Library code raises these; only the command-line layer turns them into
exit codes.
"""


class DcDownloadError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(DcDownloadError):
    """Raised when the configuration fails validation."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class CatalogError(DcDownloadError):
    """Raised when the Digital Collections API returns an error response."""


class AuthenticationError(CatalogError):
    """Raised when the API rejects the access token."""


class CaptureError(DcDownloadError):
    """Raised when a capture cannot provide the requested image or filename."""
