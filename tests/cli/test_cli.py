"""
Tests for the llvmenv command-line interface.
"""

import json

import pytest
import yaml

from llvmenv.cli.commands.env import format_shell
from llvmenv.cli.parser import CLI
from llvmenv.toolchain.variables import EnvironmentVariable, MergePolicy

LLVM_VARIABLES = ("INCLUDE_PATH", "LD_LIBRARY_PATH", "LIBRARIES", "LLVM_BIN_PATH", "LLVMINTERP")


@pytest.fixture
def config_file(temp_dir):
    return temp_dir / "config" / "preferences.yaml"


@pytest.fixture
def clean_env(monkeypatch, temp_dir):
    """Process environment without any LLVM on PATH."""
    monkeypatch.setenv("PATH", str(temp_dir / "empty"))
    monkeypatch.setenv("LLVMENV_HOME", str(temp_dir / "home"))
    for name in LLVM_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def llvm_home(temp_dir, make_llvm_bin):
    """LLVM installation root with the marker in bin/."""
    make_llvm_bin(temp_dir / "llvm" / "bin")
    return temp_dir / "llvm"


def run_cli(*args):
    return CLI().run(list(args))


class TestCLI:
    """Tests for global CLI behaviour."""

    def test_no_command(self, capsys):
        assert run_cli() == 1
        assert "usage" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli("--version")

        assert exc_info.value.code == 0
        assert "llvmenv" in capsys.readouterr().out

    def test_unknown_config_key_rejected(self, config_file):
        with pytest.raises(SystemExit):
            run_cli("--config", str(config_file), "config", "set", "colour", "blue")


class TestLocateCommand:
    """Tests for 'llvmenv locate'."""

    def test_not_found(self, clean_env, config_file, capsys):
        assert run_cli("--config", str(config_file), "locate") == 1
        assert capsys.readouterr().out == ""

    def test_found_through_preference(self, clean_env, config_file, llvm_home, capsys):
        run_cli("--config", str(config_file), "config", "set", "llvm_path", str(llvm_home))
        capsys.readouterr()

        assert run_cli("--config", str(config_file), "locate") == 0
        assert capsys.readouterr().out.strip() == str(llvm_home / "bin")

    def test_found_on_path(self, clean_env, config_file, llvm_home, monkeypatch, capsys):
        monkeypatch.setenv("PATH", str(llvm_home / "bin"))

        assert run_cli("--config", str(config_file), "locate") == 0
        assert capsys.readouterr().out.strip() == str(llvm_home / "bin")


class TestEnvCommand:
    """Tests for 'llvmenv env'."""

    @pytest.fixture(autouse=True)
    def llvm_on_path(self, clean_env, llvm_home, monkeypatch):
        monkeypatch.setenv("PATH", str(llvm_home / "bin"))

    def test_json(self, config_file, llvm_home, capsys):
        assert run_cli("--config", str(config_file), "env", "--format", "json") == 0

        variables = {v["name"]: v for v in json.loads(capsys.readouterr().out)}
        assert variables["LLVM_BIN_PATH"]["value"] == str(llvm_home / "bin")
        assert variables["LLVM_BIN_PATH"]["merge_policy"] == "replace"
        assert variables["LLVMINTERP"]["value"] == str(llvm_home / "bin" / "lli")
        assert variables["PATH"]["merge_policy"] == "append"

    def test_yaml_single_variable(self, config_file, llvm_home, capsys):
        assert (
            run_cli("--config", str(config_file), "env", "--format", "yaml", "--name", "LLVM_BIN_PATH")
            == 0
        )

        data = yaml.safe_load(capsys.readouterr().out)
        assert data == [
            {"name": "LLVM_BIN_PATH", "value": str(llvm_home / "bin"), "merge_policy": "replace"}
        ]

    def test_unknown_name(self, config_file, capsys):
        assert run_cli("--config", str(config_file), "env", "--name", "NOPE") == 1
        assert capsys.readouterr().out == ""

    def test_shell(self, config_file, llvm_home, capsys):
        assert run_cli("--config", str(config_file), "env") == 0

        out = capsys.readouterr().out
        assert f"export LLVM_BIN_PATH={llvm_home / 'bin'}" in out
        assert 'export PATH="${PATH:+$PATH:}"' in out

    def test_not_found(self, config_file, monkeypatch, temp_dir):
        monkeypatch.setenv("PATH", str(temp_dir / "empty"))

        assert run_cli("--config", str(config_file), "env") == 1


class TestConfigCommand:
    """Tests for 'llvmenv config'."""

    def test_set_and_get(self, config_file, capsys):
        assert run_cli("--config", str(config_file), "config", "set", "llvm_path", "/opt/llvm") == 0
        capsys.readouterr()

        assert run_cli("--config", str(config_file), "config", "get", "llvm_path") == 0
        assert capsys.readouterr().out.strip() == "/opt/llvm"

    def test_set_bool(self, config_file, capsys):
        run_cli("--config", str(config_file), "config", "set", "stdlib_added_unix", "yes")
        capsys.readouterr()

        run_cli("--config", str(config_file), "config", "get", "stdlib_added_unix")
        assert capsys.readouterr().out.strip() == "true"

    def test_set_invalid_bool(self, config_file):
        assert (
            run_cli("--config", str(config_file), "config", "set", "stdlib_added_unix", "maybe")
            == 1
        )
        assert not config_file.exists()

    def test_add_deduplicates(self, config_file):
        run_cli("--config", str(config_file), "config", "add", "libraries", "m")
        run_cli("--config", str(config_file), "config", "add", "libraries", "pthread")
        run_cli("--config", str(config_file), "config", "add", "libraries", "m")

        assert yaml.safe_load(config_file.read_text()) == {"libraries": "m:pthread"}

    def test_add_rejects_bin_path(self, config_file):
        with pytest.raises(SystemExit):
            run_cli("--config", str(config_file), "config", "add", "llvm_path", "/opt/llvm")

    def test_unset(self, config_file):
        run_cli("--config", str(config_file), "config", "set", "include_path", "/opt/include")

        assert run_cli("--config", str(config_file), "config", "unset", "include_path") == 0
        assert yaml.safe_load(config_file.read_text()) == {}

    def test_show(self, config_file, capsys):
        run_cli("--config", str(config_file), "config", "set", "library_path", "/opt/lib")
        capsys.readouterr()

        assert run_cli("--config", str(config_file), "config", "show") == 0
        assert "library_path: /opt/lib" in capsys.readouterr().out

    def test_no_subcommand(self, config_file):
        assert run_cli("--config", str(config_file), "config") == 1

    def test_invalid_file(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text("llvm_path: [unclosed\n")

        assert run_cli("--config", str(config_file), "config", "show") == 1


def test_format_shell_quotes_values():
    variables = [
        EnvironmentVariable("LLVM_BIN_PATH", "/opt/my llvm/bin", MergePolicy.REPLACE),
        EnvironmentVariable("LIBRARIES", "m", MergePolicy.APPEND),
    ]

    assert format_shell(variables, ":") == (
        "export LLVM_BIN_PATH='/opt/my llvm/bin'\n"
        'export LIBRARIES="${LIBRARIES:+$LIBRARIES:}"m'
    )
