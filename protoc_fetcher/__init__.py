"""
protoc-fetcher: download official protobuf compiler (protoc) releases,
pinned to the version of your choice, for use from build scripts.

Usage:
    from protoc_fetcher import protoc

    protoc_path = protoc("31.1", out_dir)
    os.environ["PROTOC"] = str(protoc_path)
"""

from .fetcher import (
    RELEASE_HOST,
    ProtocDownloader,
    fetch,
    protoc,
    get_protoc_version,
)

from .platform import (
    PlatformInfo,
    detect_platform,
    is_supported_platform,
    get_supported_platforms,
    clear_platform_cache,
)

from .exceptions import (
    ProtocFetcherError,
    UnsupportedPlatformError,
    DownloadError,
    ExtractionError,
    MissingBinaryError,
    FilesystemError,
)

__version__ = "0.2.0"

__all__ = [
    "RELEASE_HOST",
    "ProtocDownloader",
    "fetch",
    "protoc",
    "get_protoc_version",
    "PlatformInfo",
    "detect_platform",
    "is_supported_platform",
    "get_supported_platforms",
    "clear_platform_cache",
    "ProtocFetcherError",
    "UnsupportedPlatformError",
    "DownloadError",
    "ExtractionError",
    "MissingBinaryError",
    "FilesystemError",
]
