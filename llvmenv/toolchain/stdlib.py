"""
Standard library seeding.

clang links C++ programs against libstdc++ on Linux and on MinGW, but it
does not always know where that library lives. Before the first build on a
host, the seeder looks the library up once and records its directory and
``stdc++`` in the user's preferences.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from ..config.preferences import (
    P_STDLIB_ADDED_UNIX,
    P_STDLIB_ADDED_WINDOWS,
    PreferenceStore,
)
from ..core.environment import SystemEnvironment
from ..core.platform import PlatformPolicy
from .suppliers import MingwSearchPathSupplier, SearchPathSupplier

logger = logging.getLogger(__name__)

STDLIB_NAME = "stdc++"

UNIX_SEARCH_ROOTS = ("/usr",)
UNIX_LIB_DIRS = (
    "lib64",
    "lib",
    "lib/x86_64-linux-gnu",
    "lib/aarch64-linux-gnu",
)


class StandardLibrarySeeder:
    """
    Adds the C++ standard library to preferences once per OS family.

    Attributes:
        preferences: Preference store receiving the library entries
        policy: Platform policy of the host
        mingw: Supplier reporting MinGW's bin directory (Windows only)
        search_roots: Unix prefixes searched for libstdc++
    """

    def __init__(
        self,
        preferences: PreferenceStore,
        policy: PlatformPolicy,
        mingw: Optional[SearchPathSupplier] = None,
        search_roots: Sequence[str] = UNIX_SEARCH_ROOTS,
        environment: Optional[SystemEnvironment] = None,
    ):
        """
        Initialize seeder.

        Args:
            preferences: Preference store receiving the library entries
            policy: Platform policy of the host
            mingw: MinGW supplier (default on Windows: one reading ``environment``)
            search_roots: Unix prefixes searched for libstdc++
            environment: System environment used by the default MinGW supplier
        """
        self.preferences = preferences
        self.policy = policy
        if mingw is None and policy.is_windows:
            mingw = MingwSearchPathSupplier(
                environment or SystemEnvironment(policy=policy)
            )
        self.mingw = mingw
        self.search_roots = [Path(root) for root in search_roots]

    def _toggle_key(self) -> Optional[str]:
        if self.policy.is_windows:
            return P_STDLIB_ADDED_WINDOWS
        if self.policy.is_unix:
            return P_STDLIB_ADDED_UNIX
        return None

    def seed(self) -> bool:
        """
        Record the standard library in preferences if not done before.

        Returns:
            True if preferences were changed

        Raises:
            PreferenceLockTimeout: If the preferences lock cannot be acquired
            OSError: If the preferences file cannot be written
        """
        key = self._toggle_key()
        if key is None:
            logger.debug(f"No standard library seeding on {self.policy.os_family}")
            return False

        if self.preferences.get_bool(key):
            return False

        if self.policy.is_windows:
            lib_dir = self.find_mingw_stdlib_dir()
        else:
            lib_dir = self.find_unix_stdlib_dir()

        if lib_dir is None:
            logger.info("C++ standard library not found, nothing to seed")
            return False

        library_path = self.preferences.get_library_path()
        libraries = self.preferences.get_libraries()
        self.preferences.append_library_path(str(lib_dir))
        self.preferences.append_library(STDLIB_NAME)
        self.preferences.set_bool(key, True)
        try:
            self.preferences.save()
        except Exception:
            # Restore memory to match the file; the next build seeds again
            self.preferences.set_library_path(library_path)
            self.preferences.set_libraries(libraries)
            self.preferences.unset(key)
            raise
        logger.info(f"Added {STDLIB_NAME} from {lib_dir} to preferences")
        return True

    def find_unix_stdlib_dir(self) -> Optional[Path]:
        """
        Find the directory holding libstdc++ on a Unix host.

        Returns:
            First lib directory containing libstdc++.so* or libstdc++.a
        """
        for root in self.search_roots:
            for lib_dir_name in UNIX_LIB_DIRS:
                lib_dir = root / lib_dir_name
                try:
                    if not lib_dir.is_dir():
                        continue
                    if any(lib_dir.glob("libstdc++.so*")) or (lib_dir / "libstdc++.a").is_file():
                        logger.debug(f"Detected libstdc++ in {lib_dir}")
                        return lib_dir
                except OSError as e:
                    logger.warning(f"Cannot search {lib_dir}: {e}")
        return None

    def find_mingw_stdlib_dir(self) -> Optional[Path]:
        """
        Find MinGW's lib directory (sibling of its bin directory).

        Returns:
            MinGW lib directory or None if MinGW is not installed
        """
        if self.mingw is None:
            return None
        try:
            bin_dir = self.mingw.get_variable("PATH")
            if not bin_dir:
                return None
            lib_dir = Path(bin_dir).parent / "lib"
            return lib_dir if lib_dir.is_dir() else None
        except Exception as e:
            logger.warning(f"MinGW lookup failed: {e}")
            return None


__all__ = ["StandardLibrarySeeder", "STDLIB_NAME"]
