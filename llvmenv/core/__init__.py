"""
Core functionality for llvmenv.

This package contains the foundational modules that other components depend on.
"""

from .environment import SystemEnvironment

from .exceptions import (
    LlvmEnvError,
    ToolchainError,
    ToolchainNotFoundError,
    PreferenceError,
    PreferenceLockTimeout,
)

from .filesystem import atomic_write, get_global_config_dir

from .locking import LockManager

from .platform import (
    PlatformInfo,
    PlatformPolicy,
    detect_platform,
    clear_platform_cache,
    current_policy,
)

__all__ = [
    "SystemEnvironment",
    "LlvmEnvError",
    "ToolchainError",
    "ToolchainNotFoundError",
    "PreferenceError",
    "PreferenceLockTimeout",
    "atomic_write",
    "get_global_config_dir",
    "LockManager",
    "PlatformInfo",
    "PlatformPolicy",
    "detect_platform",
    "clear_platform_cache",
    "current_policy",
]
