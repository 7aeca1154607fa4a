"""
Tests for the installation orchestrator — ordering, failure policy, outcome.
"""

from devenv.adapters.mock import MockShell
from devenv.core.services.installer.data.catalog import BUILTIN_PACKAGES
from devenv.core.services.installer.orchestration.orchestrator import (
    PackageResult,
    RunOutcome,
    install_package,
    install_packages,
)
from tests.factories import make_package


class TestInstallPackages:
    def test_installs_in_resolved_order(self, abc_catalog, mock_shell):
        outcome = install_packages(["C"], shell=mock_shell, catalog=abc_catalog)
        assert mock_shell.commands_run == ["install A", "install B", "install C"]
        assert outcome.installed == ["A", "B", "C"]
        assert outcome.failed == []
        assert outcome.status == "ok"

    def test_failure_does_not_stop_the_run(self, abc_catalog, mock_shell):
        mock_shell.set_failure("install B")
        outcome = install_packages(["C"], shell=mock_shell, catalog=abc_catalog)
        # C is still attempted although it depends on B.
        assert mock_shell.commands_run == ["install A", "install B", "install C"]
        assert outcome.failed == ["B"]
        assert outcome.installed == ["A", "C"]
        assert outcome.status == "partial"

    def test_exception_becomes_failure_record(self, abc_catalog, mock_shell):
        mock_shell.set_error("install B", RuntimeError("disk on fire"))
        outcome = install_packages(["C"], shell=mock_shell, catalog=abc_catalog)
        assert outcome.failed == ["B"]
        assert "C" in outcome.installed
        result = outcome.results["B"]
        assert result.error == "RuntimeError: disk on fire"
        assert "Traceback" in result.trace

    def test_already_installed_skips_handler(self, abc_catalog):
        shell = MockShell(installed=["check A"])
        outcome = install_packages(["C"], shell=shell, catalog=abc_catalog)
        assert "install A" not in shell.commands_run
        assert outcome.installed == ["A", "B", "C"]
        assert outcome.results["A"].status == "already-installed"

    def test_unknown_ids_ignored(self, abc_catalog, mock_shell):
        outcome = install_packages(["ghost", "A"], shell=mock_shell, catalog=abc_catalog)
        assert outcome.installed == ["A"]
        assert outcome.resolution.unknown == ["ghost"]

    def test_missing_prerequisite_not_installed(self, mock_shell):
        catalog = {"app": make_package("app", "ghost"), "git": make_package("git")}
        outcome = install_packages(["app", "git"], shell=mock_shell, catalog=catalog)
        assert mock_shell.commands_run == ["install git"]
        assert outcome.installed == ["git"]
        assert outcome.resolution.skipped == ["app"]

    def test_dry_run_runs_nothing(self, abc_catalog, mock_shell):
        outcome = install_packages(["C"], shell=mock_shell, catalog=abc_catalog, dry_run=True)
        assert mock_shell.call_count == 0
        assert outcome.resolution.order == ["A", "B", "C"]
        assert outcome.installed == []

    def test_cycle_installs_the_rest(self, cyclic_catalog, mock_shell):
        outcome = install_packages(["A", "X"], shell=mock_shell, catalog=cyclic_catalog)
        assert mock_shell.commands_run == ["install X"]
        assert outcome.installed == ["X"]
        assert not outcome.resolution.complete

    def test_post_install_runs_after_success(self, mock_shell):
        install_packages(["nvm"], shell=mock_shell, catalog=BUILTIN_PACKAGES)
        nvm = BUILTIN_PACKAGES["nvm"]
        assert mock_shell.commands_run == [nvm.command, *nvm.post_install]

    def test_post_install_failure_still_installed(self, mock_shell):
        nvm = BUILTIN_PACKAGES["nvm"]
        mock_shell.set_failure(nvm.post_install[0])
        outcome = install_packages(["nvm"], shell=mock_shell, catalog=BUILTIN_PACKAGES)
        assert outcome.installed == ["nvm"]

    def test_no_post_install_after_failure(self, mock_shell):
        nvm = BUILTIN_PACKAGES["nvm"]
        mock_shell.set_failure(nvm.command)
        install_packages(["nvm"], shell=mock_shell, catalog=BUILTIN_PACKAGES)
        assert mock_shell.commands_run == [nvm.command]

    def test_default_catalog(self, mock_shell):
        outcome = install_packages(["git"], shell=mock_shell)
        assert outcome.installed == ["git"]

    def test_fresh_outcome_per_run(self, abc_catalog, mock_shell):
        first = install_packages(["A"], shell=mock_shell, catalog=abc_catalog)
        second = install_packages(["B"], shell=mock_shell, catalog=abc_catalog)
        assert first.installed == ["A"]
        assert second.installed == ["A", "B"]
        assert first is not second


class TestProgress:
    def test_events(self, abc_catalog):
        shell = MockShell(installed=["check A"])
        shell.set_failure("install B")
        events = []

        def on_progress(event, package, detail):
            events.append((event, package.id if package else None))

        install_packages(["C"], shell=shell, catalog=abc_catalog, on_progress=on_progress)
        assert events == [
            ("resolved", None),
            ("start", "A"), ("skip", "A"),
            ("start", "B"), ("failed", "B"),
            ("start", "C"), ("installed", "C"),
        ]

    def test_broken_callback_does_not_break_run(self, abc_catalog, mock_shell):
        def on_progress(event, package, detail):
            raise ValueError("ui broke")

        outcome = install_packages(
            ["C"], shell=mock_shell, catalog=abc_catalog, on_progress=on_progress,
        )
        assert outcome.installed == ["A", "B", "C"]


class TestInstallPackage:
    def test_never_raises(self, abc_catalog, mock_shell, settings):
        mock_shell.set_error("install A", KeyError("x"))
        result = install_package(abc_catalog["A"], mock_shell, settings)
        assert result.status == "failed"
        assert not result.ok


class TestRunOutcome:
    def test_record_deduplicates(self):
        outcome = RunOutcome()
        outcome.record(PackageResult("a", "installed"))
        outcome.record(PackageResult("a", "installed"))
        assert outcome.installed == ["a"]

    def test_status(self):
        outcome = RunOutcome()
        assert outcome.status == "ok"
        outcome.record(PackageResult("a", "failed", error="x"))
        assert outcome.status == "failed"
        outcome.record(PackageResult("b", "already-installed"))
        assert outcome.status == "partial"
        assert not outcome.all_ok

    def test_to_dict(self, abc_catalog, mock_shell):
        d = install_packages(["B"], shell=mock_shell, catalog=abc_catalog).to_dict()
        assert d["installed"] == ["A", "B"]
        assert d["resolution"]["order"] == ["A", "B"]
        assert [r["status"] for r in d["results"]] == ["installed", "installed"]
