"""
Platform detection for llvmenv.

This module detects the host operating system once and turns it into a
PlatformPolicy: the handful of facts the toolchain locator needs to know
about the platform (executable suffix, separators, whether companion
POSIX toolchains must be merged into PATH).

Usage:
    from llvmenv.core.platform import current_policy

    policy = current_policy()
    print(policy.executable_name("llvm-ar"))  # 'llvm-ar.exe' on Windows
"""

import functools
import platform
from dataclasses import dataclass


@dataclass
class PlatformInfo:
    """
    Basic platform information.

    Attributes:
        os: Operating system ('windows', 'linux', 'macos')
    """

    os: str

    def __str__(self) -> str:
        return self.os


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.
    """
    return PlatformInfo(os=_detect_os())


def _detect_os() -> str:
    """
    Detect operating system.

    Returns:
        Normalized OS name: 'windows', 'linux', 'macos'. Other systems are
        reported by their lowercase ``platform.system()`` name.
    """
    system = platform.system().lower()

    if system == "windows" or system.startswith(("cygwin", "msys", "mingw")):
        return "windows"
    elif system == "darwin":
        return "macos"
    return system


def clear_platform_cache():
    """
    Clear the platform detection cache.

    This forces the next call to detect_platform() to re-detect.
    Useful for testing.
    """
    detect_platform.cache_clear()


@dataclass(frozen=True)
class PlatformPolicy:
    """
    Platform-dependent behaviour of the toolchain locator, selected once.

    Attributes:
        os_family: 'windows', 'linux' or 'macos' (other Unixes keep their name)
        executable_suffix: Suffix appended to marker executables ('.exe' or '')
        augment_search_path: Whether companion toolchains are merged into PATH
        path_separator: Separator between entries of a path list
        file_separator: Separator between path components
    """

    os_family: str
    executable_suffix: str = ""
    augment_search_path: bool = False
    path_separator: str = ":"
    file_separator: str = "/"

    @classmethod
    def windows(cls, path_separator: str = ";", file_separator: str = "\\"):
        """Policy for Windows hosts."""
        return cls(
            os_family="windows",
            executable_suffix=".exe",
            augment_search_path=True,
            path_separator=path_separator,
            file_separator=file_separator,
        )

    @classmethod
    def posix(cls, os_family: str = "linux"):
        """Policy for Linux, macOS and other POSIX hosts."""
        return cls(os_family=os_family)

    @classmethod
    def for_platform(cls, info: PlatformInfo) -> "PlatformPolicy":
        """Select the policy matching detected platform information."""
        if info.os == "windows":
            return cls.windows()
        return cls.posix(info.os)

    @property
    def is_windows(self) -> bool:
        return self.os_family == "windows"

    @property
    def is_unix(self) -> bool:
        """True for Linux and other non-macOS Unixes."""
        return not self.is_windows and self.os_family != "macos"

    def executable_name(self, name: str) -> str:
        """
        Get the on-disk file name of an executable.

        Example:
            >>> PlatformPolicy.windows().executable_name("llvm-ar")
            'llvm-ar.exe'
        """
        return name + self.executable_suffix


def current_policy() -> PlatformPolicy:
    """Get the PlatformPolicy of the running host."""
    return PlatformPolicy.for_platform(detect_platform())


__all__ = [
    "PlatformInfo",
    "PlatformPolicy",
    "detect_platform",
    "clear_platform_cache",
    "current_policy",
]
