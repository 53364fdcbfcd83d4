"""
Tests for llvmenv.toolchain.suppliers module.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from llvmenv.toolchain.suppliers import (
    CygwinSearchPathSupplier,
    MingwSearchPathSupplier,
    StaticSearchPathSupplier,
    default_companion_suppliers,
)


@pytest.fixture
def windows_environment(make_environment, windows_policy):
    def _make(**variables):
        return make_environment(windows_policy, **variables)

    return _make


class TestStaticSearchPathSupplier:
    def test_returns_known_variable(self):
        supplier = StaticSearchPathSupplier({"PATH": "/opt/mingw/bin"})

        assert supplier.get_variable("PATH") == "/opt/mingw/bin"
        assert supplier.get_variable("INCLUDE_PATH") is None


class TestMingwSearchPathSupplier:
    """Tests for MinGW discovery."""

    def test_found_through_home_variable(self, windows_environment, temp_dir, make_llvm_bin):
        """MINGW_HOME pointing at an installation is used."""
        bin_dir = make_llvm_bin(temp_dir / "mingw" / "bin", marker="gcc.exe")
        supplier = MingwSearchPathSupplier(
            windows_environment(MINGW_HOME=str(temp_dir / "mingw"))
        )

        assert supplier.get_variable("PATH") == str(bin_dir)

    def test_only_path_supplied(self, windows_environment, temp_dir, make_llvm_bin):
        make_llvm_bin(temp_dir / "mingw" / "bin", marker="gcc.exe")
        supplier = MingwSearchPathSupplier(
            windows_environment(MINGW_HOME=str(temp_dir / "mingw"))
        )

        assert supplier.get_variable("LD_LIBRARY_PATH") is None

    def test_not_installed(self, windows_environment, temp_dir):
        """Without a marker executable nothing is supplied."""
        (temp_dir / "mingw" / "bin").mkdir(parents=True)
        supplier = MingwSearchPathSupplier(
            windows_environment(MINGW_HOME=str(temp_dir / "mingw"))
        )

        with patch.object(MingwSearchPathSupplier, "standard_locations", ()):
            assert supplier.get_variable("PATH") is None

    def test_result_is_cached(self, windows_environment, temp_dir, make_llvm_bin):
        """The filesystem is searched once."""
        make_llvm_bin(temp_dir / "mingw" / "bin", marker="gcc.exe")
        supplier = MingwSearchPathSupplier(
            windows_environment(MINGW_HOME=str(temp_dir / "mingw"))
        )
        first = supplier.find_bin_dir()

        with patch.object(supplier, "_candidate_locations") as candidates:
            assert supplier.find_bin_dir() == first
            candidates.assert_not_called()

    def test_probe_error_is_skipped(self, windows_environment, temp_dir, make_llvm_bin):
        """An unreadable location does not stop the search."""
        good = make_llvm_bin(temp_dir / "good" / "bin", marker="gcc.exe")
        supplier = MingwSearchPathSupplier(windows_environment())
        original_is_file = Path.is_file

        def fake_is_file(self):
            if "broken" in str(self):
                raise PermissionError("denied")
            return original_is_file(self)

        locations = (str(temp_dir / "broken"), str(temp_dir / "good"))
        with patch.object(MingwSearchPathSupplier, "standard_locations", locations):
            with patch.object(Path, "is_file", autospec=True, side_effect=fake_is_file):
                assert supplier.find_bin_dir() == good


class TestCygwinSearchPathSupplier:
    def test_found_through_home_variable(self, windows_environment, temp_dir, make_llvm_bin):
        bin_dir = make_llvm_bin(temp_dir / "cygwin64" / "bin", marker="bash.exe")
        supplier = CygwinSearchPathSupplier(
            windows_environment(CYGWIN_HOME=str(temp_dir / "cygwin64"))
        )

        assert supplier.get_variable("PATH") == str(bin_dir)


def test_default_companion_order(windows_environment):
    """MinGW is merged into PATH before Cygwin."""
    suppliers = default_companion_suppliers(windows_environment())

    assert [type(s) for s in suppliers] == [
        MingwSearchPathSupplier,
        CygwinSearchPathSupplier,
    ]
