"""Test fixtures for protoc-fetcher tests.

- archives: In-memory protoc release archives (zip bytes) and output directories

Import fixtures in your tests using:
    from tests.fixtures.archives import protoc_archive
"""

__all__ = [
    "archives",
]
