"""
Unit tests for download module.

Tests download functionality with mocked network requests.
"""

import pytest
import requests
import responses

from protoc_fetcher.download import download_file
from protoc_fetcher.exceptions import DownloadError


URL = "https://example.com/protoc-31.1-linux-x86_64.zip"


class TestDownloadFile:
    """Test download_file function."""

    @responses.activate
    def test_simple_download(self, tmp_path):
        """Test simple download writes the body to disk."""
        content = b"archive bytes"
        destination = tmp_path / "archive.zip"

        responses.add(
            responses.GET,
            URL,
            body=content,
            status=200,
            headers={"content-length": str(len(content))},
        )

        result = download_file(URL, destination)

        assert result == destination
        assert destination.read_bytes() == content

    @responses.activate
    def test_creates_parent_directories(self, tmp_path):
        """Test missing parent directories are created."""
        destination = tmp_path / "a" / "b" / "archive.zip"
        responses.add(responses.GET, URL, body=b"x", status=200)

        download_file(URL, destination)

        assert destination.exists()

    @responses.activate
    def test_not_found_raises_download_error(self, tmp_path):
        """Test a 404 is reported with URL and status code."""
        destination = tmp_path / "archive.zip"
        responses.add(responses.GET, URL, body=b"Not Found", status=404)

        with pytest.raises(DownloadError, match="404") as exc_info:
            download_file(URL, destination)

        assert exc_info.value.url == URL
        assert exc_info.value.status_code == 404
        assert not destination.exists()

    @responses.activate
    def test_non_200_success_status_rejected(self, tmp_path):
        """Test only a 200 response counts as success."""
        responses.add(responses.GET, URL, body=b"", status=204)

        with pytest.raises(DownloadError):
            download_file(URL, tmp_path / "archive.zip")

    @responses.activate
    def test_connection_error_raises_download_error(self, tmp_path):
        """Test transport failures are wrapped in DownloadError."""
        responses.add(
            responses.GET,
            URL,
            body=requests.exceptions.ConnectionError("connection refused"),
        )

        with pytest.raises(DownloadError, match="connection refused") as exc_info:
            download_file(URL, tmp_path / "archive.zip")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)

    @responses.activate
    def test_single_attempt_no_retry(self, tmp_path):
        """Test a failing download is not retried."""
        responses.add(responses.GET, URL, status=500)

        with pytest.raises(DownloadError):
            download_file(URL, tmp_path / "archive.zip")

        assert len(responses.calls) == 1

    def test_empty_url_raises_value_error(self, tmp_path):
        """Test empty URL is rejected."""
        with pytest.raises(ValueError, match="URL cannot be empty"):
            download_file("", tmp_path / "archive.zip")
