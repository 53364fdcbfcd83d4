"""
Config command implementation.

Shows and edits llvmenv preferences.
"""

import logging

import yaml

from llvmenv.cli.utils import load_preferences, safe_print
from llvmenv.config.preferences import BOOL_KEYS

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Expected a boolean (true/false), got '{value}'")


def run(args) -> int:
    """
    Run the config command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    command = getattr(args, "config_command", None)
    if not command:
        logger.error("No config sub-command specified (show, get, set, add, unset)")
        return 1

    preferences = load_preferences(args.config)

    if command == "show":
        values = preferences.to_dict()
        if values:
            safe_print(yaml.safe_dump(values, default_flow_style=False).rstrip())
        return 0

    if command == "get":
        if args.key in BOOL_KEYS:
            safe_print(str(preferences.get_bool(args.key)).lower())
        else:
            safe_print(preferences.get_string(args.key))
        return 0

    if command == "set":
        if args.key in BOOL_KEYS:
            preferences.set_bool(args.key, _parse_bool(args.value))
        else:
            preferences.set_string(args.key, args.value.strip())
        preferences.save()
        logger.info(f"Set {args.key}")
        return 0

    if command == "add":
        if preferences.append_string(args.key, args.value):
            preferences.save()
            logger.info(f"Added {args.value} to {args.key}")
        else:
            logger.info(f"{args.key} already contains {args.value}")
        return 0

    if command == "unset":
        preferences.unset(args.key)
        preferences.save()
        logger.info(f"Unset {args.key}")
        return 0

    logger.error(f"Unknown config command: {command}")
    return 1
