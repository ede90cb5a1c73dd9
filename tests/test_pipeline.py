"""Tests for phase ordering and per-phase failure isolation."""

from workstation_installer.main import build_phases
from workstation_installer.orchestrator import InstallStatus
from workstation_installer.packages import PackageRequest
from workstation_installer.pipeline import ProvisionContext, run_pipeline

from conftest import FakeRunner

ORDER = [
    "10_elevate",
    "20_update_manager",
    "30_subsystem",
    "40_drivers",
    "50_packages",
    "60_cleanup",
    "70_restart_prompt",
]


def _ctx(orch, names=("git", "nodejs")):
    return ProvisionContext(orchestrator=orch, packages=[PackageRequest(n) for n in names])


class TestRunPipeline:
    def test_phases_run_in_fixed_order(self, make_orchestrator):
        runner = FakeRunner({("wsl", "--list"): "Ubuntu"})
        result = run_pipeline(ctx=_ctx(make_orchestrator(runner)), phases=build_phases([]))

        assert result.ran_phases == ORDER
        assert result.failed_phases == {}
        firsts = [c[:2] for c in runner.calls]
        assert firsts.index(("net", "session")) < firsts.index(("choco", "upgrade"))
        assert firsts.index(("wsl", "--list")) < firsts.index(("choco", "list"))
        assert firsts[-1] == ("choco", "clean")

    def test_cleanup_runs_after_failed_installs(self, make_orchestrator):
        runner = FakeRunner(fail=lambda argv: argv[:3] == ("choco", "upgrade", "nodejs"))
        result = run_pipeline(ctx=_ctx(make_orchestrator(runner)), phases=build_phases([]))

        assert ("choco", "clean") in runner.calls
        failed = [o.package.name for o in result.outcomes if o.status is InstallStatus.FAILED]
        assert failed == ["nodejs"]

    def test_failing_phase_does_not_stop_later_phases(self, make_orchestrator, install_log):
        # Self-update of the manager raises out of its phase.
        runner = FakeRunner(fail=lambda argv: argv == ("choco", "upgrade", "chocolatey", "-y"))
        result = run_pipeline(ctx=_ctx(make_orchestrator(runner)), phases=build_phases([]))

        assert list(result.failed_phases) == ["20_update_manager"]
        assert result.ran_phases == ORDER
        assert ("choco", "clean") in runner.calls
        assert any("20_update_manager" in m for m in install_log.warnings())

    def test_failing_restart_command_is_contained(self, make_orchestrator):
        runner = FakeRunner(fail=lambda argv: argv[0] == "shutdown")
        orch = make_orchestrator(runner, input_fn=lambda p: "y")
        result = run_pipeline(ctx=_ctx(orch), phases=build_phases([]))

        assert "70_restart_prompt" in result.failed_phases
        assert result.restart_requested is False

    def test_only_filters_phases(self, make_orchestrator):
        runner = FakeRunner()
        result = run_pipeline(
            ctx=_ctx(make_orchestrator(runner)),
            phases=build_phases([]),
            only={"40_drivers"},
        )
        assert result.ran_phases == ["40_drivers"]
        assert all(c[0] == "powershell" for c in runner.calls)

    def test_restart_answer_is_recorded(self, make_orchestrator):
        runner = FakeRunner()
        orch = make_orchestrator(runner, input_fn=lambda p: "y")
        result = run_pipeline(ctx=_ctx(orch, ()), phases=build_phases([]))

        assert result.restart_requested is True
        assert runner.calls[-1] == ("shutdown", "-r", "-t", "0")

    def test_to_dict(self, make_orchestrator):
        runner = FakeRunner({("choco", "list", "--local-only", "git"): "git 2.45.0"})
        result = run_pipeline(
            ctx=_ctx(make_orchestrator(runner)),
            phases=build_phases([]),
            only={"50_packages"},
        )
        d = result.to_dict()
        assert d["ran_phases"] == ["50_packages"]
        assert d["packages"] == [
            {"package": "git", "status": "already-present"},
            {"package": "nodejs", "status": "installed"},
        ]
