"""
Platform detection for protoc-fetcher.

Maps the running host (OS, CPU architecture) onto the suffix used in the
names of the official protoc release archives, e.g.:

    - linux 64-bit:   protoc-31.1-linux-x86_64.zip
    - macOS ARM:      protoc-31.1-osx-aarch_64.zip
    - windows 32-bit: protoc-31.1-win32.zip

Usage:
    from protoc_fetcher.platform import detect_platform, release_suffix

    info = detect_platform()
    print(f"Platform string: {info.platform_string()}")
    print(f"Release suffix: {release_suffix(info)}")
"""

import functools
import platform
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from protoc_fetcher.exceptions import UnsupportedPlatformError


@dataclass(frozen=True)
class PlatformInfo:
    """
    Host platform as far as protoc releases are concerned.

    Attributes:
        os: Operating system ('linux', 'macos', 'windows')
        arch: CPU architecture ('x64', 'arm64', 'x86', 'arm', or the raw
            machine name for anything else, e.g. 'ppc64le')
    """

    os: str
    arch: str

    def platform_string(self) -> str:
        """
        Get canonical platform string (e.g., 'linux-x64', 'macos-arm64').

        Example:
            >>> PlatformInfo('linux', 'x64').platform_string()
            'linux-x64'
        """
        return f"{self.os}-{self.arch}"

    def __str__(self) -> str:
        return self.platform_string()


# (os, arch) -> release archive suffix
SUPPORTED_SUFFIXES: Mapping[Tuple[str, str], str] = MappingProxyType(
    {
        ("linux", "x64"): "linux-x86_64",
        ("linux", "x86"): "linux-x86_32",
        ("linux", "arm64"): "linux-aarch_64",
        ("linux", "ppc64le"): "linux-ppcle_64",
        ("linux", "s390x"): "linux-s390_64",
        ("macos", "x64"): "osx-x86_64",
        ("macos", "arm64"): "osx-aarch_64",
        ("windows", "x86"): "win32",
        ("windows", "x64"): "win64",
        ("windows", "arm64"): "win64",
    }
)

MACOS_UNIVERSAL_SUFFIX = "osx-universal_binary"


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.

    Raises:
        UnsupportedPlatformError: If the operating system is not recognized
    """
    return PlatformInfo(os=_detect_os(), arch=_detect_architecture())


def _detect_os() -> str:
    """
    Detect operating system.

    Returns:
        Normalized OS name: 'windows', 'linux', 'macos'

    Raises:
        UnsupportedPlatformError: If OS is not supported
    """
    system = platform.system().lower()

    if system == "windows":
        return "windows"
    elif system == "linux":
        return "linux"
    elif system == "darwin":
        return "macos"
    else:
        raise UnsupportedPlatformError(system or "unknown")


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    Returns:
        Normalized architecture: 'x64', 'arm64', 'x86', 'arm', or the
        lower-cased machine name when it is not one of those
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "x86"
    elif machine.startswith("arm"):
        return "arm"
    else:
        return machine


def release_suffix(info: PlatformInfo) -> str:
    """
    Get the release archive suffix for a platform.

    macOS hosts with an architecture that has no dedicated build get the
    universal binary.

    Raises:
        UnsupportedPlatformError: If no release is published for the platform

    Example:
        >>> release_suffix(PlatformInfo('linux', 'x64'))
        'linux-x86_64'
    """
    suffix = SUPPORTED_SUFFIXES.get((info.os, info.arch))
    if suffix is not None:
        return suffix
    if info.os == "macos":
        return MACOS_UNIVERSAL_SUFFIX
    raise UnsupportedPlatformError(info.platform_string())


def executable_name(info: PlatformInfo) -> str:
    """Name of the protoc binary inside the release archive."""
    return "protoc.exe" if info.os == "windows" else "protoc"


def is_supported_platform(info: Optional[PlatformInfo] = None) -> bool:
    """
    Check if protoc releases are published for a platform.

    Args:
        info: PlatformInfo to check. If None, detects current platform.
    """
    try:
        release_suffix(info if info is not None else detect_platform())
    except UnsupportedPlatformError:
        return False
    return True


def get_supported_platforms() -> list[str]:
    """
    Get list of all supported platform strings.

    Example:
        >>> 'linux-x64' in get_supported_platforms()
        True
    """
    return [f"{os_name}-{arch}" for os_name, arch in SUPPORTED_SUFFIXES]


def clear_platform_cache():
    """
    Clear the platform detection cache.

    This forces the next call to detect_platform() to re-detect.
    """
    detect_platform.cache_clear()


__all__ = [
    "PlatformInfo",
    "SUPPORTED_SUFFIXES",
    "detect_platform",
    "release_suffix",
    "executable_name",
    "is_supported_platform",
    "get_supported_platforms",
    "clear_platform_cache",
]
