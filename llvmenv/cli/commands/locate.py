"""
Locate command implementation.

Prints the LLVM bin directory.
"""

import logging

from llvmenv.cli.utils import create_locator, safe_print
from llvmenv.core.exceptions import ToolchainNotFoundError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the locate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if LLVM was found)
    """
    locator = create_locator(args)
    bin_path = locator.resolve_bin_path()

    if not bin_path:
        logger.error(str(ToolchainNotFoundError()))
        return 1

    safe_print(bin_path)
    return 0
