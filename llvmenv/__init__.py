"""
llvmenv - LLVM toolchain discovery and build environment synthesis.

Usage:
    from llvmenv import Locator, PreferenceStore

    locator = Locator(PreferenceStore())
    for variable in locator.get_all_variables():
        print(variable.name, variable.value)
"""

from llvmenv.config.preferences import PreferenceStore
from llvmenv.core.environment import SystemEnvironment
from llvmenv.core.platform import PlatformPolicy
from llvmenv.toolchain.locator import Locator
from llvmenv.toolchain.variables import EnvironmentVariable, MergePolicy

__version__ = "0.1.0"

__all__ = [
    "Locator",
    "PreferenceStore",
    "SystemEnvironment",
    "PlatformPolicy",
    "EnvironmentVariable",
    "MergePolicy",
    "__version__",
]
