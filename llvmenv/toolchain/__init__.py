"""
Toolchain module for llvmenv.

This module provides:
- LLVM installation discovery (Locator)
- Environment variable synthesis (VariableSet)
- Companion toolchain suppliers for Windows
- Standard library seeding and build lifecycle hooks
"""

from llvmenv.toolchain.variables import (
    EnvironmentVariable,
    MergePolicy,
    VariableSet,
)
from llvmenv.toolchain.suppliers import (
    SearchPathSupplier,
    StaticSearchPathSupplier,
    CompanionToolchainSupplier,
    MingwSearchPathSupplier,
    CygwinSearchPathSupplier,
    default_companion_suppliers,
)
from llvmenv.toolchain.locator import Locator
from llvmenv.toolchain.stdlib import StandardLibrarySeeder
from llvmenv.toolchain.lifecycle import (
    BuildConfiguration,
    BuildEvent,
    BuildLifecycleListener,
)

__all__ = [
    # Data model
    "EnvironmentVariable",
    "MergePolicy",
    "VariableSet",
    # Suppliers
    "SearchPathSupplier",
    "StaticSearchPathSupplier",
    "CompanionToolchainSupplier",
    "MingwSearchPathSupplier",
    "CygwinSearchPathSupplier",
    "default_companion_suppliers",
    # Locator
    "Locator",
    # Lifecycle
    "StandardLibrarySeeder",
    "BuildConfiguration",
    "BuildEvent",
    "BuildLifecycleListener",
]
