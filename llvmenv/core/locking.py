"""
Concurrent access control for llvmenv.

File-based locking keeps two llvmenv processes (for example a CLI call and
a build server) from interleaving read-modify-write cycles on the shared
preferences file.

Usage:
    from llvmenv.core.locking import LockManager

    lock_manager = LockManager()
    with lock_manager.preferences_lock(timeout=10):
        # Safely rewrite preferences.yaml
        pass
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from filelock import FileLock, Timeout

from .exceptions import PreferenceLockTimeout
from .filesystem import get_global_config_dir

logger = logging.getLogger(__name__)


class LockManager:
    """
    Manages locks for llvmenv resources.

    Uses the `filelock` library for cross-platform, cross-process locks
    that are released automatically when the holder dies.

    Attributes:
        lock_dir: Directory where lock files are stored
    """

    def __init__(self, lock_dir: Optional[Path] = None):
        """
        Initialize lock manager.

        Args:
            lock_dir: Directory for lock files (default: global config/lock/)
        """
        if lock_dir is None:
            lock_dir = get_global_config_dir() / "lock"

        self.lock_dir = Path(lock_dir)
        self.lock_dir.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def preferences_lock(self, timeout: int = 10):
        """
        Acquire the preferences lock.

        Args:
            timeout: Maximum wait time in seconds (default: 10)

        Raises:
            PreferenceLockTimeout: If lock can't be acquired within timeout
        """
        lock_path = self.lock_dir / "preferences.lock"
        lock = FileLock(lock_path, timeout=timeout)

        try:
            with lock:
                logger.debug(f"Acquired preferences lock: {lock_path}")
                yield
                logger.debug(f"Released preferences lock: {lock_path}")
        except Timeout as e:
            logger.error(f"Could not acquire preferences lock after {timeout}s")
            raise PreferenceLockTimeout(
                f"Could not acquire preferences lock after {timeout}s. "
                "Another llvmenv process may be running."
            ) from e


__all__ = ["LockManager"]
