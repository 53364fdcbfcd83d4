"""
Filesystem helpers for llvmenv.

Atomic writes for the preferences file and the global configuration
directory location.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


def get_global_config_dir() -> Path:
    """
    Get the platform-specific global configuration directory path.

    The ``LLVMENV_HOME`` environment variable takes precedence.

    Returns:
        Path: The global configuration directory path.
            - Windows: %USERPROFILE%\\.llvmenv
            - Linux/macOS: ~/.llvmenv/

    Example:
        >>> config_dir = get_global_config_dir()
        >>> print(config_dir)
        /home/user/.llvmenv  # on Linux
    """
    override = os.environ.get("LLVMENV_HOME")
    if override:
        return Path(override)

    if os.name == "nt":
        user_profile = os.environ.get("USERPROFILE")
        if user_profile:
            return Path(user_profile) / ".llvmenv"
    return Path.home() / ".llvmenv"


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    The file is never in a partially-written state. If the write fails,
    the original file (if any) remains unchanged.

    Args:
        file_path: Path to write to
        content: Content to write (string or bytes)
        encoding: Text encoding (used only for string content)
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Same directory keeps the rename on one filesystem
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        if isinstance(content, str):
            with open(temp_fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with open(temp_fd, "wb") as f:
                f.write(content)

        temp_path.replace(file_path)
        logger.debug(f"Wrote {file_path}")

    except Exception:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise


__all__ = ["get_global_config_dir", "atomic_write"]
