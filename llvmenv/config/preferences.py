"""YAML-backed preference storage for llvmenv.

Preferences hold the user's overrides: the LLVM installation folder and the
extra include directories, library search directories and libraries to hand
to the compiler. List-valued preferences are stored as a single string joined
with the platform path-list separator, which is also how the locator consumes
them.

Example preferences.yaml:

    llvm_path: /opt/llvm-18
    include_path: /opt/include:/usr/local/include
    library_path: /opt/lib
    libraries: stdc++
    stdlib_added_unix: true
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..core.exceptions import PreferenceError
from ..core.filesystem import atomic_write, get_global_config_dir
from ..core.locking import LockManager
from ..core.platform import PlatformPolicy, current_policy

logger = logging.getLogger(__name__)

P_LLVM_PATH = "llvm_path"
P_LLVM_INCLUDE_PATH = "include_path"
P_LLVM_LIBRARY_PATH = "library_path"
P_LLVM_LIBRARIES = "libraries"
P_STDLIB_ADDED_WINDOWS = "stdlib_added_windows"
P_STDLIB_ADDED_UNIX = "stdlib_added_unix"

STRING_KEYS = (P_LLVM_PATH, P_LLVM_INCLUDE_PATH, P_LLVM_LIBRARY_PATH, P_LLVM_LIBRARIES)
BOOL_KEYS = (P_STDLIB_ADDED_WINDOWS, P_STDLIB_ADDED_UNIX)


def _is_scalar(value: Any) -> bool:
    # bool is a subclass of int
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def default_preferences_file() -> Path:
    """Get the default preferences file location."""
    return get_global_config_dir() / "preferences.yaml"


class PreferenceStore:
    """
    Key-value preference storage.

    Values live in memory; when a file path is given they are loaded from
    and saved to a YAML file. Saving takes a cross-process file lock and
    writes atomically.

    Attributes:
        path: Preferences file, or None for a purely in-memory store
        policy: Platform policy providing the path-list separator
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        policy: Optional[PlatformPolicy] = None,
        lock_manager: Optional[LockManager] = None,
    ):
        """
        Initialize preference store.

        Args:
            path: YAML file backing the store (None keeps values in memory)
            policy: Platform policy (default: policy of the running host)
            lock_manager: Lock manager guarding saves (default: one next to path)

        Raises:
            PreferenceError: If an existing file cannot be parsed
        """
        self.path = Path(path) if path is not None else None
        self.policy = policy or current_policy()
        self._lock_manager = lock_manager
        self._values: Dict[str, Any] = {}

        if self.path is not None:
            self.load()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self):
        """
        Load preferences from disk, replacing in-memory values.

        A missing file yields an empty store.

        Raises:
            PreferenceError: If the file is not valid YAML, not a mapping, or
                holds a value of the wrong type
        """
        if self.path is None:
            return

        if not self.path.exists():
            logger.debug(f"Preferences file not found, using defaults: {self.path}")
            self._values = {}
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PreferenceError(f"Invalid YAML in {self.path}: {e}") from e
        except OSError as e:
            raise PreferenceError(f"Cannot read {self.path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise PreferenceError(
                f"Preferences file {self.path} must contain a mapping, "
                f"got {type(data).__name__}"
            )

        unknown = sorted(set(data) - set(STRING_KEYS) - set(BOOL_KEYS))
        if unknown:
            logger.warning(f"Ignoring unknown preferences: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for key in STRING_KEYS:
            if data.get(key) is not None:
                values[key] = self._string_value(key, data[key])
        for key in BOOL_KEYS:
            if data.get(key) is not None:
                if not isinstance(data[key], bool):
                    raise PreferenceError(
                        f"Preference '{key}' in {self.path} must be true or false, "
                        f"got {data[key]!r}"
                    )
                values[key] = data[key]
        self._values = values

        logger.debug(f"Loaded preferences from {self.path}")

    def _string_value(self, key: str, value: Any) -> str:
        """
        Convert a loaded YAML value to its stored string form.

        Scalars are kept as text; a list of scalars is joined with the
        path-list separator.

        Raises:
            PreferenceError: For booleans, mappings or nested lists
        """
        if isinstance(value, list):
            if not all(_is_scalar(item) for item in value):
                raise PreferenceError(
                    f"Preference '{key}' in {self.path} must be a list of strings"
                )
            return self.policy.path_separator.join(
                str(item) for item in value if str(item).strip()
            )
        if not _is_scalar(value):
            raise PreferenceError(
                f"Preference '{key}' in {self.path} must be a string, "
                f"got {type(value).__name__}"
            )
        return str(value)

    def save(self):
        """
        Save preferences to disk atomically.

        Does nothing for an in-memory store.

        Raises:
            PreferenceLockTimeout: If another process holds the lock too long
        """
        if self.path is None:
            return

        if self._lock_manager is None:
            self._lock_manager = LockManager(self.path.parent / "lock")

        content = yaml.safe_dump(self.to_dict(), default_flow_style=False)
        with self._lock_manager.preferences_lock():
            atomic_write(self.path, content)
        logger.debug(f"Saved preferences to {self.path}")

    def to_dict(self) -> Dict[str, Any]:
        """Get a copy of all stored values."""
        return dict(self._values)

    # ------------------------------------------------------------------
    # Generic access
    # ------------------------------------------------------------------

    def _check_key(self, key: str, allowed) -> None:
        if key not in allowed:
            raise PreferenceError(
                f"Unknown preference '{key}'. "
                f"Valid keys: {', '.join(STRING_KEYS + BOOL_KEYS)}"
            )

    def get_string(self, key: str) -> str:
        """Get a string preference, '' when unset."""
        self._check_key(key, STRING_KEYS)
        return self._values.get(key, "")

    def set_string(self, key: str, value: str):
        self._check_key(key, STRING_KEYS)
        self._values[key] = value

    def get_bool(self, key: str) -> bool:
        """Get a boolean preference, False when unset."""
        self._check_key(key, BOOL_KEYS)
        return bool(self._values.get(key, False))

    def set_bool(self, key: str, value: bool):
        self._check_key(key, BOOL_KEYS)
        self._values[key] = bool(value)

    def unset(self, key: str):
        """Remove a preference, falling back to its default."""
        self._check_key(key, STRING_KEYS + BOOL_KEYS)
        self._values.pop(key, None)

    def append_string(self, key: str, item: str) -> bool:
        """
        Append an item to a list-valued preference.

        The item is skipped when it is blank or already one of the entries.

        Args:
            key: Preference key
            item: Entry to append

        Returns:
            True if the preference changed
        """
        item = item.strip()
        if not item:
            return False

        current = self.get_string(key)
        entries = [e for e in current.split(self.policy.path_separator) if e]
        if item in entries:
            logger.debug(f"{key} already contains {item}")
            return False

        entries.append(item)
        self.set_string(key, self.policy.path_separator.join(entries))
        logger.debug(f"Appended {item} to {key}")
        return True

    # ------------------------------------------------------------------
    # Named accessors
    # ------------------------------------------------------------------

    def get_bin_path(self) -> str:
        return self.get_string(P_LLVM_PATH)

    def set_bin_path(self, path: str):
        self.set_string(P_LLVM_PATH, path)

    def get_include_path(self) -> str:
        return self.get_string(P_LLVM_INCLUDE_PATH)

    def set_include_path(self, path: str):
        self.set_string(P_LLVM_INCLUDE_PATH, path)

    def get_library_path(self) -> str:
        return self.get_string(P_LLVM_LIBRARY_PATH)

    def set_library_path(self, path: str):
        self.set_string(P_LLVM_LIBRARY_PATH, path)

    def get_libraries(self) -> str:
        return self.get_string(P_LLVM_LIBRARIES)

    def set_libraries(self, libraries: str):
        self.set_string(P_LLVM_LIBRARIES, libraries)

    def append_include_path(self, path: str) -> bool:
        return self.append_string(P_LLVM_INCLUDE_PATH, path)

    def append_library_path(self, path: str) -> bool:
        return self.append_string(P_LLVM_LIBRARY_PATH, path)

    def append_library(self, library: str) -> bool:
        return self.append_string(P_LLVM_LIBRARIES, library)


__all__ = [
    "PreferenceStore",
    "default_preferences_file",
    "P_LLVM_PATH",
    "P_LLVM_INCLUDE_PATH",
    "P_LLVM_LIBRARY_PATH",
    "P_LLVM_LIBRARIES",
    "P_STDLIB_ADDED_WINDOWS",
    "P_STDLIB_ADDED_UNIX",
    "STRING_KEYS",
    "BOOL_KEYS",
]
