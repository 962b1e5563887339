"""
Single-attempt archive download.

Release archives are fetched with one blocking HTTP GET and streamed to
disk. There is no retry and no checksum verification: a failed request is
reported to the caller as a DownloadError.
"""

import logging
from pathlib import Path

import requests
from requests.exceptions import RequestException

from protoc_fetcher.exceptions import DownloadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


def download_file(url: str, destination: Path) -> Path:
    """
    Download file from URL to destination.

    Args:
        url: URL to download from
        destination: Local path to save file (parent directories are created)

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: On any transport error or a non-200 response
        ValueError: If URL or destination is empty

    Example:
        >>> url = "https://example.com/protoc-31.1-linux-x86_64.zip"
        >>> download_file(url, Path("out/protoc-31.1-linux-x86_64.zip"))
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Downloading from {url}")

    try:
        response = requests.get(url, stream=True, allow_redirects=True)
    except RequestException as e:
        raise DownloadError(f"Error downloading {url}: {e}", url=url) from e

    with response:
        if response.status_code != 200:
            raise DownloadError(
                f"Error downloading release archive: "
                f"{response.status_code} {response.reason} ({url})",
                url=url,
                status_code=response.status_code,
            )

        downloaded = 0
        try:
            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        downloaded += len(chunk)
        except RequestException as e:
            destination.unlink(missing_ok=True)
            raise DownloadError(
                f"Download of {url} interrupted: {e}",
                url=url,
                status_code=response.status_code,
            ) from e
        except OSError:
            destination.unlink(missing_ok=True)
            raise

    logger.info(f"Download complete: {destination} ({downloaded} bytes)")
    return destination
