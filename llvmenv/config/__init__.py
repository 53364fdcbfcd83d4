"""Configuration (user preferences) for llvmenv."""

from .preferences import (
    PreferenceStore,
    default_preferences_file,
    P_LLVM_PATH,
    P_LLVM_INCLUDE_PATH,
    P_LLVM_LIBRARY_PATH,
    P_LLVM_LIBRARIES,
    P_STDLIB_ADDED_WINDOWS,
    P_STDLIB_ADDED_UNIX,
)

__all__ = [
    "PreferenceStore",
    "default_preferences_file",
    "P_LLVM_PATH",
    "P_LLVM_INCLUDE_PATH",
    "P_LLVM_LIBRARY_PATH",
    "P_LLVM_LIBRARIES",
    "P_STDLIB_ADDED_WINDOWS",
    "P_STDLIB_ADDED_UNIX",
]
