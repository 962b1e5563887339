"""
Fetch and cache official protoc releases.

A release archive is downloaded once per (version, output directory) and
extracted to ``<out_dir>/protoc-<version>/``. Later calls find the binary
already in place and return it without touching the network.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Union

from protoc_fetcher.download import download_file
from protoc_fetcher.exceptions import FilesystemError, MissingBinaryError
from protoc_fetcher.filesystem import ensure_directory, extract_archive, make_executable
from protoc_fetcher.platform import (
    PlatformInfo,
    detect_platform,
    executable_name,
    release_suffix,
)

logger = logging.getLogger(__name__)

RELEASE_HOST = "https://github.com/protocolbuffers/protobuf/releases/download"


class ProtocDownloader:
    """
    Download and install a protoc release into an output directory.

    Layout produced::

        <out_dir>/
          protoc-<version>/
            bin/protoc[.exe]
            include/...
    """

    def __init__(
        self,
        out_dir: Union[str, Path],
        version: str,
        platform: Optional[PlatformInfo] = None,
    ):
        """
        Initialize protoc downloader.

        Args:
            out_dir: Directory that holds cached releases
            version: Exact release version, e.g. "31.1" (no "v" prefix)
            platform: Platform information (auto-detected if None)

        Raises:
            ValueError: If version is empty
            UnsupportedPlatformError: If the host OS is not recognized
        """
        if not version:
            raise ValueError("version cannot be empty")

        self.out_dir = Path(out_dir)
        self.version = version
        self.platform = platform or detect_platform()
        self.install_dir = self.out_dir / f"protoc-{version}"

    def release_name(self) -> str:
        """
        Get the release name, e.g. 'protoc-31.1-linux-x86_64'.

        Raises:
            UnsupportedPlatformError: If no release exists for the platform
        """
        return f"protoc-{self.version}-{release_suffix(self.platform)}"

    def get_download_url(self) -> str:
        """Get the release archive URL for the configured platform."""
        return f"{RELEASE_HOST}/v{self.version}/{self.release_name()}.zip"

    def get_executable_path(self) -> Path:
        """Path where the protoc binary lives once installed."""
        return self.install_dir / "bin" / executable_name(self.platform)

    def is_installed(self) -> bool:
        """Check if the protoc binary is already present."""
        return self.get_executable_path().exists()

    def download(self) -> Path:
        """
        Ensure protoc is installed and return the path to the binary.

        Returns:
            Path to the protoc executable

        Raises:
            UnsupportedPlatformError: If no release exists for the platform
            DownloadError: If the archive could not be downloaded
            ExtractionError: If the archive could not be extracted
            MissingBinaryError: If the archive did not contain the binary
            FilesystemError: If directories or permissions could not be set up
        """
        release_name = self.release_name()
        logger.debug(f"Detected platform {self.platform}, release {release_name}")

        protoc_path = self.get_executable_path()
        if protoc_path.exists():
            logger.info(f"protoc {self.version} already installed at {protoc_path}")
            return protoc_path

        logger.info(f"protoc {self.version} not found, downloading...")
        url = self.get_download_url()
        logger.debug(f"protoc download URL: {url}")

        ensure_directory(self.out_dir)
        archive_path = self.out_dir / f"{release_name}.zip"

        try:
            try:
                download_file(url, archive_path)
            except OSError as e:
                raise FilesystemError(
                    f"Failed to write {archive_path}: {e}", path=archive_path
                ) from e

            logger.info(f"Extracting {archive_path.name} to {self.install_dir}")
            extract_archive(archive_path, self.install_dir)

            if not protoc_path.exists():
                raise MissingBinaryError(protoc_path)

            make_executable(protoc_path)
        finally:
            archive_path.unlink(missing_ok=True)

        logger.info(f"protoc installed successfully: {protoc_path}")
        return protoc_path


def fetch(
    version: str,
    out_dir: Union[str, Path],
    platform: Optional[PlatformInfo] = None,
) -> Path:
    """
    Download a protoc release into ``out_dir`` unless already cached.

    Args:
        version: Exact release version, e.g. "31.1"
        out_dir: Cache directory
        platform: Target platform (auto-detected if None)

    Returns:
        Path to the protoc executable
    """
    return ProtocDownloader(out_dir, version, platform=platform).download()


def protoc(version: str, out_dir: Union[str, Path]) -> Path:
    """
    Download an official release of the protobuf compiler and return its path.

    The release archive matching ``version`` is downloaded from
    https://github.com/protocolbuffers/protobuf/releases and the binary is
    extracted into a subdirectory of ``out_dir``. A previously downloaded
    binary of the same version in ``out_dir`` is reused.

    Don't prefix the version with a "v".

    Example:
        >>> protoc_path = protoc("31.1", Path("build/tools"))
        >>> os.environ["PROTOC"] = str(protoc_path)
    """
    return fetch(version, out_dir)


def get_protoc_version(protoc_path: Union[str, Path]) -> str:
    """
    Run ``protoc --version`` and return its output, e.g. 'libprotoc 31.1'.

    Raises:
        FilesystemError: If the binary cannot be run or exits non-zero
    """
    protoc_path = Path(protoc_path)
    try:
        result = subprocess.run(
            [str(protoc_path), "--version"],
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise FilesystemError(f"Failed to run {protoc_path}: {e}", path=protoc_path) from e

    if result.returncode != 0:
        raise FilesystemError(
            f"{protoc_path} --version exited with {result.returncode}: "
            f"{result.stderr.strip()}",
            path=protoc_path,
        )
    return result.stdout.strip()
