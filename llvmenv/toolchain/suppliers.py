"""
Search-path suppliers for companion toolchains.

On Windows the clang driver relies on a POSIX-emulation toolchain (MinGW
or Cygwin) for headers, libraries and the linker, so its ``bin`` directory
has to be on PATH next to LLVM's. Each supplier answers a single question:
given a variable name, what value would this toolchain contribute?
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from ..core.environment import SystemEnvironment

logger = logging.getLogger(__name__)


class SearchPathSupplier(ABC):
    """Something that may contribute a value for a named variable."""

    @abstractmethod
    def get_variable(self, name: str) -> Optional[str]:
        """
        Get this supplier's value for a variable.

        Args:
            name: Variable name (e.g. 'PATH')

        Returns:
            Value, or None if the supplier has nothing for this variable
        """
        pass


class StaticSearchPathSupplier(SearchPathSupplier):
    """Supplier backed by a fixed mapping."""

    def __init__(self, values: Mapping[str, str]):
        self.values = dict(values)

    def get_variable(self, name: str) -> Optional[str]:
        return self.values.get(name)


class CompanionToolchainSupplier(SearchPathSupplier):
    """
    Locates a companion toolchain's ``bin`` directory.

    Looks at the directory named by ``home_variable`` first, then at the
    standard install locations, and accepts the first one whose ``bin``
    holds ``marker``. Only PATH is supplied.
    """

    name = "companion"
    home_variable = ""
    marker = ""
    standard_locations: Sequence[str] = ()

    def __init__(self, environment: Optional[SystemEnvironment] = None):
        self.environment = environment or SystemEnvironment()
        self._bin_dir: Optional[Path] = None
        self._searched = False

    def get_variable(self, name: str) -> Optional[str]:
        if name != "PATH":
            return None
        bin_dir = self.find_bin_dir()
        return str(bin_dir) if bin_dir else None

    def find_bin_dir(self) -> Optional[Path]:
        """
        Find the toolchain's ``bin`` directory; the result is cached.

        Returns:
            Path to ``bin`` or None if the toolchain is not installed
        """
        if self._searched:
            return self._bin_dir

        self._searched = True
        for location in self._candidate_locations():
            bin_dir = location / "bin"
            try:
                if (bin_dir / self.marker).is_file():
                    logger.info(f"Found {self.name} at {location}")
                    self._bin_dir = bin_dir
                    return bin_dir
            except OSError as e:
                logger.warning(f"Cannot probe {bin_dir} for {self.name}: {e}")

        logger.debug(f"{self.name} not found")
        return None

    def _candidate_locations(self) -> List[Path]:
        locations = []
        home = self.environment.get(self.home_variable) if self.home_variable else None
        if home and home.strip():
            locations.append(Path(home.strip()))
        locations.extend(Path(p) for p in self.standard_locations)
        return locations


class MingwSearchPathSupplier(CompanionToolchainSupplier):
    """MinGW / MSYS2 GCC."""

    name = "MinGW"
    home_variable = "MINGW_HOME"
    marker = "gcc.exe"
    standard_locations = (
        "C:/MinGW",
        "C:/mingw64",
        "C:/msys64/mingw64",
        "C:/msys64/ucrt64",
    )


class CygwinSearchPathSupplier(CompanionToolchainSupplier):
    """Cygwin."""

    name = "Cygwin"
    home_variable = "CYGWIN_HOME"
    marker = "bash.exe"
    standard_locations = (
        "C:/cygwin64",
        "C:/cygwin",
    )


def default_companion_suppliers(
    environment: Optional[SystemEnvironment] = None,
) -> List[SearchPathSupplier]:
    """Get the companion suppliers probed on Windows, in PATH order."""
    return [
        MingwSearchPathSupplier(environment),
        CygwinSearchPathSupplier(environment),
    ]


__all__ = [
    "SearchPathSupplier",
    "StaticSearchPathSupplier",
    "CompanionToolchainSupplier",
    "MingwSearchPathSupplier",
    "CygwinSearchPathSupplier",
    "default_companion_suppliers",
]
