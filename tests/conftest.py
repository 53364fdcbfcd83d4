"""
Pytest configuration and shared fixtures for llvmenv tests.
"""

import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from llvmenv.config.preferences import PreferenceStore
from llvmenv.core.environment import SystemEnvironment
from llvmenv.core.platform import PlatformPolicy


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def linux_policy() -> PlatformPolicy:
    """Linux platform policy."""
    return PlatformPolicy.posix("linux")


@pytest.fixture
def windows_policy() -> PlatformPolicy:
    """
    Windows platform policy using the host's separators.

    Keeps real filesystem probes working while exercising the '.exe'
    suffix and companion PATH augmentation.
    """
    return PlatformPolicy.windows(path_separator=os.pathsep, file_separator=os.sep)


@pytest.fixture
def make_llvm_bin():
    """Factory creating a directory that holds a marker executable."""

    def _make(directory: Path, marker: str = "llvm-ar") -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        executable = directory / marker
        executable.write_text("#!/bin/sh\n")
        executable.chmod(0o755)
        return directory

    return _make


@pytest.fixture
def make_environment():
    """Factory for SystemEnvironment instances with fixed variables."""

    def _make(policy: PlatformPolicy, **variables) -> SystemEnvironment:
        return SystemEnvironment(variables=variables, policy=policy)

    return _make


@pytest.fixture
def memory_preferences(linux_policy) -> PreferenceStore:
    """In-memory preference store with a Linux policy."""
    return PreferenceStore(policy=linux_policy)
