"""
Centralized exception hierarchy for llvmenv.

The toolchain locator itself never raises across its public operations;
these exceptions are used by the preference storage and CLI layers.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class LlvmEnvError(Exception):
    """Base exception for all llvmenv errors."""

    pass


# ============================================================================
# Toolchain-related Exceptions
# ============================================================================


class ToolchainError(LlvmEnvError):
    """Base exception for toolchain-related errors."""

    pass


class ToolchainNotFoundError(ToolchainError):
    """Raised when no candidate directory holds the marker executable."""

    def __init__(self, marker_executable: str = "llvm-ar"):
        self.marker_executable = marker_executable
        super().__init__(
            f"No LLVM installation found (looked for {marker_executable}). "
            "Set one with: llvmenv config set llvm_path <dir>"
        )


# ============================================================================
# Preference Exceptions
# ============================================================================


class PreferenceError(LlvmEnvError):
    """Raised when preferences cannot be read, written or validated."""

    pass


class PreferenceLockTimeout(PreferenceError):
    """Raised when the preferences lock cannot be acquired within timeout."""

    pass
