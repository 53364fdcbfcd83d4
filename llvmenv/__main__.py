"""
Entry point for running llvmenv CLI as a module.

Usage: python -m llvmenv [command] [options]
"""

from llvmenv.cli.parser import main

if __name__ == "__main__":
    main()
