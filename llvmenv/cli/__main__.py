"""
Entry point for running llvmenv CLI as a module.

Usage: python -m llvmenv.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
