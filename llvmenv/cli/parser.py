"""
llvmenv CLI argument parser.

This module implements the command-line interface for llvmenv using argparse.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from llvmenv.config.preferences import BOOL_KEYS, STRING_KEYS

try:
    from importlib.metadata import version

    __version__ = version("llvmenv")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """llvmenv command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="llvmenv",
            description="llvmenv - locate LLVM and build its environment",
            epilog='Use "llvmenv COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument(
            "--version", action="version", version=f"llvmenv {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to preferences file (default: ~/.llvmenv/preferences.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_locate_command(subparsers)
        self._add_env_command(subparsers)
        self._add_config_command(subparsers)

        return parser

    def _add_locate_command(self, subparsers):
        """Add 'locate' subcommand."""
        subparsers.add_parser(
            "locate",
            help="Print the LLVM bin directory",
            description="Find the LLVM installation and print its bin directory",
        )

    def _add_env_command(self, subparsers):
        """Add 'env' subcommand."""
        parser = subparsers.add_parser(
            "env",
            help="Print LLVM environment variables",
            description="Print the environment variables derived from the LLVM installation",
        )
        parser.add_argument(
            "--format",
            choices=["shell", "json", "yaml"],
            default="shell",
            metavar="FORMAT",
            help="Output format (shell|json|yaml) [default: shell]",
        )
        parser.add_argument(
            "--name",
            metavar="NAME",
            help="Print a single variable",
        )

    def _add_config_command(self, subparsers):
        """Add 'config' subcommand with sub-subcommands."""
        parser = subparsers.add_parser(
            "config",
            help="Manage preferences",
            description="Show or edit llvmenv preferences",
        )

        config_subparsers = parser.add_subparsers(
            dest="config_command", help="Preference commands", metavar="COMMAND"
        )
        all_keys = list(STRING_KEYS + BOOL_KEYS)

        config_subparsers.add_parser("show", help="Show all preferences")

        get_parser = config_subparsers.add_parser("get", help="Print one preference")
        get_parser.add_argument("key", choices=all_keys, metavar="KEY")

        set_parser = config_subparsers.add_parser("set", help="Set a preference")
        set_parser.add_argument("key", choices=all_keys, metavar="KEY")
        set_parser.add_argument("value")

        add_parser = config_subparsers.add_parser(
            "add", help="Append an entry to a list preference"
        )
        add_parser.add_argument("key", choices=list(STRING_KEYS[1:]), metavar="KEY")
        add_parser.add_argument("value")

        unset_parser = config_subparsers.add_parser("unset", help="Remove a preference")
        unset_parser.add_argument("key", choices=all_keys, metavar="KEY")

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "locate": "llvmenv.cli.commands.locate",
            "env": "llvmenv.cli.commands.env",
            "config": "llvmenv.cli.commands.config",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        import importlib

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
