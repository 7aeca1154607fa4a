"""
Tests for method-specific install handlers and presence checks.
"""

import pytest

from devenv.adapters.mock import MockShell
from devenv.core.models.package import InstallMethod
from devenv.core.models.settings import Settings
from devenv.core.services.installer.data.catalog import BUILTIN_PACKAGES
from devenv.core.services.installer.execution.handlers import (
    INSTALL_HANDLERS,
    run_install_handler,
    run_post_install,
)
from devenv.core.services.installer.execution.presence import command_exists, is_installed
from tests.factories import make_package


class TestDispatch:
    def test_every_method_has_a_handler(self):
        assert set(INSTALL_HANDLERS) == set(InstallMethod)

    @pytest.mark.parametrize(
        "method, tool",
        [
            (InstallMethod.PACKAGE_MANAGER, "brew"),
            (InstallMethod.LANGUAGE_PACKAGE_MANAGER, "ruby"),
            (InstallMethod.DOWNLOAD_SCRIPT, "curl"),
        ],
    )
    def test_missing_tool_fails_without_running(self, method, tool, settings):
        shell = MockShell(missing_binaries=[tool])
        pkg = make_package("x", method=method)
        result = run_install_handler(pkg, shell, settings)
        assert not result.ok
        assert result.exit_code is None
        assert "required for X" in result.error
        assert shell.commands_run == []

    def test_missing_ruby_warns_once_with_hint(self, settings, caplog):
        shell = MockShell(missing_binaries=["ruby"])
        with caplog.at_level("WARNING"):
            result = run_install_handler(BUILTIN_PACKAGES["rails"], shell, settings)
        assert not result.ok
        assert "Please install Ruby first" in result.error
        warnings = [r for r in caplog.records if r.levelname == "WARNING"]
        assert len(warnings) == 1
        assert warnings[0].getMessage() == result.error

    def test_brew_install_runs_command(self, mock_shell, settings):
        result = run_install_handler(BUILTIN_PACKAGES["git"], mock_shell, settings)
        assert result.ok
        assert mock_shell.commands_run == ["brew install git"]

    def test_gem_install(self, mock_shell, settings):
        result = run_install_handler(BUILTIN_PACKAGES["rails"], mock_shell, settings)
        assert result.ok
        assert mock_shell.commands_run == ["gem install rails --no-document"]

    def test_command_failure_propagates(self, mock_shell, settings):
        mock_shell.set_failure("brew install git", exit_code=2)
        result = run_install_handler(BUILTIN_PACKAGES["git"], mock_shell, settings)
        assert not result.ok
        assert result.exit_code == 2

    def test_direct_honours_sudo(self, mock_shell, settings):
        pkg = make_package("tool", requires_sudo=True)
        run_install_handler(pkg, mock_shell, settings)
        assert mock_shell.sudo_commands == ["install tool"]

    def test_direct_needs_no_tool(self, settings):
        shell = MockShell(missing_binaries=["brew", "ruby", "curl", "rbenv"])
        assert run_install_handler(make_package("tool"), shell, settings).ok


class TestRubyHandler:
    LISTING = "3.2.5\n3.3.4\njruby-9.4.8.0\n"

    def test_installs_latest_and_activates(self, mock_shell, settings):
        mock_shell.set_output("rbenv install --list", self.LISTING)
        result = run_install_handler(BUILTIN_PACKAGES["ruby"], mock_shell, settings)
        assert result.ok
        assert mock_shell.commands_run == [
            "rbenv install 3.3.4",
            "rbenv global 3.3.4",
            "rbenv rehash",
        ]

    def test_fallback_version(self, mock_shell):
        settings = Settings(fallback_ruby_version="3.2.2")
        run_install_handler(BUILTIN_PACKAGES["ruby"], mock_shell, settings)
        assert mock_shell.commands_run[0] == "rbenv install 3.2.2"

    def test_stops_at_first_failure(self, mock_shell, settings):
        mock_shell.set_output("rbenv install --list", self.LISTING)
        mock_shell.set_failure("rbenv install 3.3.4")
        result = run_install_handler(BUILTIN_PACKAGES["ruby"], mock_shell, settings)
        assert not result.ok
        assert mock_shell.commands_run == ["rbenv install 3.3.4"]

    def test_missing_rbenv(self, settings):
        shell = MockShell(missing_binaries=["rbenv"])
        result = run_install_handler(BUILTIN_PACKAGES["ruby"], shell, settings)
        assert not result.ok
        assert "rbenv is required" in result.error
        assert shell.commands_run == []

    def test_shims_added_to_path(self, mock_shell, settings, tmp_path):
        mock_shell.set_output("rbenv root", f"{tmp_path}\n")
        run_install_handler(BUILTIN_PACKAGES["ruby"], mock_shell, settings)
        assert mock_shell.env["PATH"].startswith(f"{tmp_path}/shims:")

    def test_shims_skipped_when_root_missing(self, mock_shell, settings, tmp_path):
        mock_shell.set_output("rbenv root", f"{tmp_path}/nope\n")
        before = mock_shell.env["PATH"]
        run_install_handler(BUILTIN_PACKAGES["ruby"], mock_shell, settings)
        assert mock_shell.env["PATH"] == before


class TestPostInstall:
    def test_runs_all_commands(self, mock_shell):
        results = run_post_install(BUILTIN_PACKAGES["nvm"], mock_shell)
        assert len(results) == 2
        assert mock_shell.commands_run == list(BUILTIN_PACKAGES["nvm"].post_install)

    def test_failure_is_not_fatal(self, mock_shell):
        pkg = make_package("x", post_install=("one", "two"))
        mock_shell.set_failure("one")
        mock_shell.set_error("two", RuntimeError("boom"))
        results = run_post_install(pkg, mock_shell)
        assert [r.ok for r in results] == [False]


class TestPresence:
    def test_installed(self):
        shell = MockShell(installed=["check a"])
        assert is_installed(make_package("a"), shell)
        assert not is_installed(make_package("b"), shell)

    def test_check_errors_count_as_missing(self, mock_shell, monkeypatch):
        def boom(command):
            raise OSError("no shell")

        monkeypatch.setattr(mock_shell, "check", boom)
        assert not is_installed(make_package("a"), mock_shell)

    def test_command_exists(self):
        shell = MockShell(missing_binaries=["brew"])
        assert command_exists("git", shell)
        assert not command_exists("brew", shell)
        assert command_exists("brew install x", MockShell())
