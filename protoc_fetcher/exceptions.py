"""
Centralized exception hierarchy for protoc-fetcher.

Every failure of a fetch surfaces as one of these types, with the URL or
path involved attached as an attribute so callers can report it.
"""

from pathlib import Path
from typing import Optional


class ProtocFetcherError(Exception):
    """Base exception for all protoc-fetcher errors."""

    pass


class UnsupportedPlatformError(ProtocFetcherError):
    """Raised when no protoc release exists for the host OS/architecture."""

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"protoc releases are not published for platform: {platform}")


class DownloadError(ProtocFetcherError):
    """Raised when the release archive could not be downloaded."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class FilesystemError(ProtocFetcherError):
    """Raised when a directory, permission or path operation fails."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)


class ExtractionError(FilesystemError):
    """Raised when the release archive is corrupt or unreadable."""

    pass


class MissingBinaryError(ProtocFetcherError):
    """Raised when an extracted archive does not contain the expected binary."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(
            f"Extracted protoc archive, but could not find the binary at {path}"
        )
