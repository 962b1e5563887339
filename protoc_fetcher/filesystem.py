"""
File system helpers for installing a protoc release.

- Zip extraction with directory traversal checks
- Executable permission handling (no-op on Windows)
- Directory creation
"""

import os
import stat
import zipfile
from pathlib import Path
from typing import Union

from protoc_fetcher.exceptions import ExtractionError, FilesystemError

IS_WINDOWS = os.name == "nt"

EXECUTABLE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def is_relative_to(path: Path, parent: Path) -> bool:
    """Check whether ``path`` lies under ``parent``."""
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def _validate_archive_path(member: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Raises:
        ExtractionError: If the member would land outside ``destination``
    """
    member_path = (destination / member).resolve()
    if not is_relative_to(member_path, destination.resolve()):
        raise ExtractionError(
            f"Archive member '{member}' attempts directory traversal; "
            "extraction has been blocked.",
            path=member_path,
        )


def extract_archive(archive_path: Union[str, Path], destination: Union[str, Path]) -> None:
    """
    Extract a zip archive into a destination directory.

    All member paths are validated before anything is written. Files that
    already exist under ``destination`` are overwritten.

    Args:
        archive_path: Path to the .zip file
        destination: Directory to extract to (created if missing)

    Raises:
        ExtractionError: If the archive is missing, corrupt or unsafe
        FilesystemError: If the destination cannot be created
    """
    archive_path = Path(archive_path)
    destination = ensure_directory(destination)

    if not archive_path.exists():
        raise ExtractionError(f"Archive not found: {archive_path}", path=archive_path)

    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            members = zf.namelist()
            for member in members:
                _validate_archive_path(member, destination)
            for member in members:
                zf.extract(member, destination)
    except ExtractionError:
        raise
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, EOFError) as e:
        raise ExtractionError(
            f"Failed to extract {archive_path}: {e}", path=archive_path
        ) from e


def make_executable(path: Union[str, Path]) -> None:
    """
    Mark a file executable by owner, group and others.

    Does nothing on Windows, where there is no execute bit.

    Raises:
        FilesystemError: If the permissions could not be changed
    """
    if IS_WINDOWS:
        return

    path = Path(path)
    try:
        mode = path.stat().st_mode
        path.chmod(mode | EXECUTABLE_BITS)
    except OSError as e:
        raise FilesystemError(f"Failed to make {path} executable: {e}", path=path) from e


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists (idempotent).

    Raises:
        FilesystemError: If the directory cannot be created
    """
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(f"Failed to create directory {path}: {e}", path=path) from e
    return path
