"""
llvmenv/toolchain/locator.py

LLVM toolchain discovery and environment variable synthesis.

The Locator finds the directory holding LLVM's binaries and derives the
environment a build needs from it:

    LLVM_BIN_PATH    LLVM bin directory                        (REPLACE)
    PATH             bin directory [+ companion toolchains]    (APPEND)
    LLVMINTERP       <bin>/lli                                 (APPEND)
    INCLUDE_PATH     system value + preference value           (APPEND)
    LD_LIBRARY_PATH  system value + preference value           (APPEND)
    LIBRARIES        system value + preference value           (APPEND)

The merge policy tells the consuming build system how to combine each
entry with its own baseline environment; it does not affect how the
locator builds the value itself.

Resolution order for the bin directory, first hit wins:
    1. the cached result, unless the cache is stale
    2. the preferred installation folder
    3. the preferred installation folder + 'bin'
    4. every entry of PATH, in order
"""

import logging
import threading
from pathlib import Path
from typing import List, Optional, Sequence

from ..config.preferences import PreferenceStore
from ..core.environment import SystemEnvironment
from .suppliers import SearchPathSupplier, default_companion_suppliers
from .variables import EnvironmentVariable, MergePolicy, VariableSet

logger = logging.getLogger(__name__)

ENV_VAR_NAME_LLVM_BIN = "LLVM_BIN_PATH"
ENV_VAR_NAME_LLVMINTERP = "LLVMINTERP"
ENV_VAR_NAME_PATH = "PATH"
ENV_VAR_NAME_INCLUDE_PATH = "INCLUDE_PATH"
ENV_VAR_NAME_LIBRARY_PATH = "LD_LIBRARY_PATH"
ENV_VAR_NAME_LIBRARIES = "LIBRARIES"

MARKER_EXECUTABLE = "llvm-ar"
CONVENTIONAL_SUBDIR = "bin"
INTERPRETER_NAME = "lli"


class Locator:
    """
    Locates an LLVM installation and owns the derived VariableSet.

    One instance is meant to live for a whole build session. Construction
    runs ``initialize()``; if nothing is found the locator stays stale and
    the next ``resolve_bin_path()`` scans again.

    Example:
        >>> locator = Locator(PreferenceStore(), SystemEnvironment())
        >>> locator.get_bin_path()
        '/usr/lib/llvm-18/bin'
    """

    def __init__(
        self,
        preferences: PreferenceStore,
        environment: Optional[SystemEnvironment] = None,
        companions: Optional[Sequence[SearchPathSupplier]] = None,
    ):
        """
        Initialize locator and resolve the environment.

        Args:
            preferences: User preference storage
            environment: System environment accessor (default: live environment)
            companions: Suppliers merged into PATH on Windows
                (default: MinGW and Cygwin)
        """
        self.preferences = preferences
        self.environment = environment or SystemEnvironment()
        self.policy = self.environment.policy
        if companions is None:
            companions = default_companion_suppliers(self.environment)
        self.companions: List[SearchPathSupplier] = list(companions)

        self._variables = VariableSet()
        self._stale = True
        self._lock = threading.RLock()

        self.initialize()

    @property
    def stale(self) -> bool:
        """Whether the next bin path query must rescan."""
        return self._stale

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve_bin_path(
        self,
        marker_executable: str = MARKER_EXECUTABLE,
        conventional_subdir: str = CONVENTIONAL_SUBDIR,
    ) -> Optional[str]:
        """
        Find the LLVM bin directory.

        Args:
            marker_executable: Executable whose presence proves a bin directory
            conventional_subdir: Subdirectory tried under the preferred folder

        Returns:
            Bin directory, or None if no candidate holds the marker
        """
        with self._lock:
            if not self._stale:
                cached = self._variables.get(ENV_VAR_NAME_LLVM_BIN)
                if cached is not None and cached.value:
                    return cached.value

            preferred = self.preferences.get_bin_path().strip()
            if preferred:
                result = self.is_valid_toolchain_dir(
                    preferred, marker_executable=marker_executable
                )
                if result is None:
                    result = self.is_valid_toolchain_dir(
                        preferred, conventional_subdir, marker_executable
                    )
                if result is not None:
                    logger.debug(f"Using preferred LLVM location {result}")
                    return result
                logger.info(f"No {marker_executable} under preferred location {preferred}")

            for entry in self.environment.split_path_list(ENV_VAR_NAME_PATH):
                result = self.is_valid_toolchain_dir(
                    entry, marker_executable=marker_executable
                )
                if result is not None:
                    logger.debug(f"Found LLVM on {ENV_VAR_NAME_PATH}: {result}")
                    return result

            logger.debug(f"{marker_executable} not found")
            return None

    def is_valid_toolchain_dir(
        self,
        candidate: str,
        subdir: Optional[str] = None,
        marker_executable: str = MARKER_EXECUTABLE,
    ) -> Optional[str]:
        """
        Check whether a directory holds the marker executable.

        One trailing file separator is stripped from ``candidate`` before
        ``subdir`` is appended. I/O errors are logged and reported as
        "not valid" so callers can move on to the next candidate.

        Args:
            candidate: Directory to check
            subdir: Optional subdirectory appended to candidate
            marker_executable: Executable name without platform suffix

        Returns:
            The checked directory (including subdir) or None
        """
        sep = self.policy.file_separator
        if candidate.endswith(sep) and len(candidate) > 1:
            candidate = candidate[:-1]
        if subdir:
            candidate = candidate + sep + subdir

        try:
            if not Path(candidate).is_dir():
                return None
            marker = Path(candidate + sep + self.policy.executable_name(marker_executable))
            if marker.is_file():
                return candidate
        except OSError as e:
            logger.warning(f"Cannot probe {candidate}: {e}")
        return None

    def initialize(self) -> Optional[str]:
        """
        Resolve the bin directory and rebuild every derived variable.

        Nothing is written when the bin directory is not found; the stale
        flag is cleared only after all entries are written.

        Returns:
            Bin directory, or None if not found
        """
        with self._lock:
            bin_path = self.resolve_bin_path()
            if not bin_path:
                logger.info("LLVM installation not found, environment left unchanged")
                return None

            search_path = bin_path
            if self.policy.augment_search_path:
                for supplier in self.companions:
                    companion_path = self._query_companion(supplier)
                    if companion_path:
                        search_path += self.policy.path_separator + companion_path

            interpreter = bin_path + self.policy.file_separator + INTERPRETER_NAME
            include_path = self._combine_with_system(
                ENV_VAR_NAME_INCLUDE_PATH, self.preferences.get_include_path()
            )
            library_path = self._combine_with_system(
                ENV_VAR_NAME_LIBRARY_PATH, self.preferences.get_library_path()
            )
            libraries = self._combine_with_system(
                ENV_VAR_NAME_LIBRARIES, self.preferences.get_libraries()
            )

            self._variables.set(ENV_VAR_NAME_LLVM_BIN, bin_path, MergePolicy.REPLACE)
            self._variables.set(ENV_VAR_NAME_PATH, search_path, MergePolicy.APPEND)
            self._variables.set(ENV_VAR_NAME_LLVMINTERP, interpreter, MergePolicy.APPEND)
            self._variables.set(ENV_VAR_NAME_INCLUDE_PATH, include_path, MergePolicy.APPEND)
            self._variables.set(ENV_VAR_NAME_LIBRARY_PATH, library_path, MergePolicy.APPEND)
            self._variables.set(ENV_VAR_NAME_LIBRARIES, libraries, MergePolicy.APPEND)
            self._stale = False

            logger.info(f"LLVM bin path: {bin_path}")
            return bin_path

    def _query_companion(self, supplier: SearchPathSupplier) -> Optional[str]:
        try:
            return supplier.get_variable(ENV_VAR_NAME_PATH)
        except Exception as e:
            logger.warning(
                f"{supplier.__class__.__name__} failed to supply {ENV_VAR_NAME_PATH}: {e}"
            )
            return None

    def _combine_with_system(self, name: str, preference_value: str) -> str:
        """System value, separator unless already terminated, then preference value."""
        sep = self.policy.path_separator
        system_value = self.environment.get(name) or ""
        combined = system_value
        if system_value and not system_value.endswith(sep):
            combined += sep
        return combined + (preference_value or "")

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def set_override_path(self, path: str):
        """Replace the bin path entry; derived variables are not recomputed."""
        with self._lock:
            self._variables.set(ENV_VAR_NAME_LLVM_BIN, path, MergePolicy.REPLACE)

    def add_include_path(self, path: str):
        """Append an include directory unless the value already contains it."""
        self._append_unless_contained(ENV_VAR_NAME_INCLUDE_PATH, path)

    def add_library_path(self, path: str):
        """Append a library search directory unless the value already contains it."""
        self._append_unless_contained(ENV_VAR_NAME_LIBRARY_PATH, path)

    def add_library(self, library: str):
        """Append a library unless the value already contains it."""
        self._append_unless_contained(ENV_VAR_NAME_LIBRARIES, library)

    def _append_unless_contained(self, name: str, item: str):
        # Plain substring check: "/usr/lib" counts as present in "/usr/lib64".
        with self._lock:
            current = self._variables.value_of(name)
            if item in current:
                return

            if current.strip():
                new_value = current + self.policy.path_separator + item
            else:
                new_value = item

            if new_value.strip():
                self._variables.set(name, new_value, MergePolicy.APPEND)
                logger.debug(f"{name} += {item}")

    def invalidate(self):
        """
        Mark the cache stale and reload values from the preferences.

        The bin path is replaced only when the preference is non-blank. The
        include path, library path and libraries are reset to the preference
        values, dropping the system environment part; the build system
        merges its own environment back in through the APPEND policy.
        """
        with self._lock:
            self._stale = True

            bin_path = self.preferences.get_bin_path().strip()
            if bin_path:
                self._variables.set(ENV_VAR_NAME_LLVM_BIN, bin_path, MergePolicy.REPLACE)

            self._variables.set(
                ENV_VAR_NAME_INCLUDE_PATH,
                self.preferences.get_include_path(),
                MergePolicy.APPEND,
            )
            self._variables.set(
                ENV_VAR_NAME_LIBRARY_PATH,
                self.preferences.get_library_path(),
                MergePolicy.APPEND,
            )
            self._variables.set(
                ENV_VAR_NAME_LIBRARIES,
                self.preferences.get_libraries(),
                MergePolicy.APPEND,
            )
            logger.debug("LLVM paths invalidated")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_bin_path(self) -> str:
        return self._variables.value_of(ENV_VAR_NAME_LLVM_BIN)

    def get_include_path(self) -> str:
        return self._variables.value_of(ENV_VAR_NAME_INCLUDE_PATH)

    def get_library_path(self) -> str:
        return self._variables.value_of(ENV_VAR_NAME_LIBRARY_PATH)

    def get_libraries(self) -> str:
        return self._variables.value_of(ENV_VAR_NAME_LIBRARIES)

    def get_variable(self, name: str) -> Optional[EnvironmentVariable]:
        with self._lock:
            return self._variables.get(name)

    def get_all_variables(self) -> List[EnvironmentVariable]:
        with self._lock:
            return self._variables.values()


__all__ = [
    "Locator",
    "ENV_VAR_NAME_LLVM_BIN",
    "ENV_VAR_NAME_LLVMINTERP",
    "ENV_VAR_NAME_PATH",
    "ENV_VAR_NAME_INCLUDE_PATH",
    "ENV_VAR_NAME_LIBRARY_PATH",
    "ENV_VAR_NAME_LIBRARIES",
    "MARKER_EXECUTABLE",
    "CONVENTIONAL_SUBDIR",
    "INTERPRETER_NAME",
]
