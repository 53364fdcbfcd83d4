"""
Env command implementation.

Prints the environment variables derived from the LLVM installation.
"""

import json
import logging
import shlex
from typing import List

import yaml

from llvmenv.cli.utils import create_locator, safe_print
from llvmenv.core.exceptions import ToolchainNotFoundError
from llvmenv.toolchain.variables import EnvironmentVariable, MergePolicy

logger = logging.getLogger(__name__)


def format_shell(variables: List[EnvironmentVariable], path_separator: str) -> str:
    """
    Format variables as POSIX shell export statements.

    REPLACE variables overwrite the current value; APPEND variables are
    added after it.
    """
    lines = []
    for var in variables:
        quoted = shlex.quote(var.value)
        if var.merge_policy is MergePolicy.REPLACE:
            lines.append(f"export {var.name}={quoted}")
        else:
            prefix = f'"${{{var.name}:+${var.name}{path_separator}}}"'
            lines.append(f"export {var.name}={prefix}{quoted}")
    return "\n".join(lines)


def run(args) -> int:
    """
    Run the env command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    locator = create_locator(args)
    variables = sorted(locator.get_all_variables(), key=lambda v: v.name)

    if not variables:
        logger.error(str(ToolchainNotFoundError()))
        return 1

    if args.name:
        variable = locator.get_variable(args.name)
        if variable is None:
            logger.error(f"Unknown variable: {args.name}")
            return 1
        variables = [variable]

    if args.format == "json":
        output = json.dumps([v.to_dict() for v in variables], indent=2)
    elif args.format == "yaml":
        output = yaml.safe_dump(
            [v.to_dict() for v in variables], default_flow_style=False
        ).rstrip()
    else:
        output = format_shell(variables, locator.policy.path_separator)

    safe_print(output)
    return 0
