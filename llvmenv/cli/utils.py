"""
Shared utilities for CLI commands.
"""

import logging
from pathlib import Path
from typing import Optional

from llvmenv.config.preferences import PreferenceStore, default_preferences_file
from llvmenv.core.environment import SystemEnvironment
from llvmenv.toolchain.locator import Locator

logger = logging.getLogger(__name__)


def load_preferences(config_file: Optional[Path] = None) -> PreferenceStore:
    """
    Load the preference store used by CLI commands.

    Args:
        config_file: Preferences file (default: global preferences file)

    Returns:
        Loaded PreferenceStore
    """
    path = Path(config_file) if config_file else default_preferences_file()
    logger.debug(f"Using preferences file {path}")
    return PreferenceStore(path)


def create_locator(args) -> Locator:
    """
    Create a Locator from parsed CLI arguments.

    Args:
        args: Parsed arguments with an optional ``config`` attribute

    Returns:
        Initialized Locator
    """
    preferences = load_preferences(getattr(args, "config", None))
    return Locator(preferences, SystemEnvironment(policy=preferences.policy))


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for Windows console.

    Args:
        message: Message to print
        file: Output file (default: stdout)
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        print(message.encode("ascii", "replace").decode("ascii"), file=file)
