import json
from pathlib import Path

from tests.trellis.helpers import REPO_URL, FakeRunner, make_services
from trellis.exec import CommandRequest
from trellis.models import InvocationOptions
from trellis.services import ServiceFailure, ServiceSuccess
from trellis.services.setup import PreInitSetupService, SetupState
from trellis.services.setup.pre_init_setup import UNKNOWN_URL_NOTE


def _write_package_json(request: CommandRequest) -> None:
    assert request.cwd is not None
    Path(request.cwd, "package.json").write_text("{}", encoding="utf-8")


def _runner(**results: int | None) -> FakeRunner:
    runner = FakeRunner(
        {
            ("git", "ls-remote"): results.get("ls_remote", 0),
            ("git", "clone"): results.get("clone", 0),
            ("npm",): results.get("install", 0),
        }
    )
    runner.on_run[("git", "clone")] = _write_package_json
    return runner


def test_sample_app_runs_every_step(tmp_path: Path) -> None:
    services, printer, telemetry, runner = make_services(tmp_path, runner=_runner())

    result = PreInitSetupService(services).run(InvocationOptions(app=REPO_URL))

    assert isinstance(result, ServiceSuccess)
    state = result.outcome.state
    assert result.outcome.should_exit is False
    assert state.completed_steps == ["validating", "cloning", "installing", "setting_defaults"]
    assert state.input_params.env_name == "sampledev"
    assert state.local_env_info is not None
    assert state.local_env_info.project_path == str(tmp_path.resolve())
    assert runner.argvs() == [
        ("git", "ls-remote", REPO_URL),
        ("git", "clone", REPO_URL, "."),
        ("npm", "install"),
    ]
    assert printer.messages("warning")[0] == UNKNOWN_URL_NOTE
    assert printer.messages("error") == []
    assert telemetry.errors == []
    stored = json.loads(
        (tmp_path / "trellis" / ".config" / "local-env-info.json").read_text(encoding="utf-8")
    )
    assert stored["envName"] == "sampledev"


def test_invalid_url_stops_before_clone(tmp_path: Path) -> None:
    services, printer, telemetry, runner = make_services(tmp_path, runner=_runner())

    result = PreInitSetupService(services).run(InvocationOptions(app="not a url"))

    assert isinstance(result, ServiceFailure)
    assert result.code == "invalid_remote_url"
    assert printer.messages("error") == ["Invalid remote github url"]
    assert telemetry.errors == [result]
    assert runner.argvs() == []


def test_unreachable_remote_is_invalid(tmp_path: Path) -> None:
    services, printer, telemetry, runner = make_services(
        tmp_path, runner=_runner(ls_remote=128)
    )

    result = PreInitSetupService(services).run(InvocationOptions(app=REPO_URL))

    assert isinstance(result, ServiceFailure)
    assert result.code == "invalid_remote_url"
    assert len(printer.messages("error")) == 1
    assert len(telemetry.errors) == 1
    assert ("git", "clone", REPO_URL, ".") not in runner.argvs()


def test_non_empty_directory_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "existing.txt").write_text("x", encoding="utf-8")
    services, printer, telemetry, runner = make_services(tmp_path, runner=_runner())

    result = PreInitSetupService(services).run(InvocationOptions(app=REPO_URL))

    assert isinstance(result, ServiceFailure)
    assert result.code == "non_empty_directory"
    assert printer.messages("error") == [
        "Please ensure you run this command in an empty directory"
    ]
    assert telemetry.errors == [result]
    assert runner.argvs() == [("git", "ls-remote", REPO_URL)]


def test_install_failure_stops_before_defaults(tmp_path: Path) -> None:
    services, printer, telemetry, _runner_ = make_services(tmp_path, runner=_runner(install=1))
    state = SetupState()

    result = PreInitSetupService(services).run(InvocationOptions(app=REPO_URL), state)

    assert isinstance(result, ServiceFailure)
    assert result.code == "install_failed"
    assert state.completed_steps == ["validating", "cloning"]
    assert state.local_env_info is None
    assert len(printer.messages("error")) == 1
    assert len(telemetry.errors) == 1


def test_missing_package_manager_skips_install(tmp_path: Path) -> None:
    runner = FakeRunner()
    services, _printer, _telemetry, _ = make_services(tmp_path, runner=runner)

    result = PreInitSetupService(services).run(InvocationOptions(app=REPO_URL))

    assert isinstance(result, ServiceSuccess)
    assert "installing" in result.outcome.state.completed_steps
    assert runner.argvs() == [("git", "ls-remote", REPO_URL), ("git", "clone", REPO_URL, ".")]


def test_quickstart_generates_skeleton_and_requests_exit(tmp_path: Path) -> None:
    services, printer, telemetry, runner = make_services(tmp_path)

    result = PreInitSetupService(services).run(InvocationOptions(quickstart=True))

    assert isinstance(result, ServiceSuccess)
    assert result.outcome.exit_code == 0
    assert result.outcome.state.completed_steps == ["generating_skeleton"]
    assert telemetry.successes == 1
    assert telemetry.errors == []
    assert runner.argvs() == []
    assert printer.messages("warning") == []
    assert (tmp_path / "trellis" / "cli.json").is_file()
    assert services.feature_flags.is_initialized()


def test_both_branches_run_sample_app_first(tmp_path: Path) -> None:
    services, _printer, telemetry, _runner_ = make_services(tmp_path, runner=_runner())

    result = PreInitSetupService(services).run(
        InvocationOptions(app=REPO_URL, quickstart=True)
    )

    assert isinstance(result, ServiceSuccess)
    assert result.outcome.exit_code == 0
    assert result.outcome.state.completed_steps == [
        "validating",
        "cloning",
        "installing",
        "setting_defaults",
        "generating_skeleton",
    ]
    assert telemetry.successes == 1
    assert services.feature_flags.get("project", "overrides") is True


def test_no_options_is_a_no_op(tmp_path: Path) -> None:
    services, printer, telemetry, runner = make_services(tmp_path)
    state = SetupState()

    result = PreInitSetupService(services).run(InvocationOptions(), state)

    assert isinstance(result, ServiceSuccess)
    assert result.outcome.state is state
    assert result.outcome.exit_code is None
    assert state == SetupState()
    assert printer.lines == []
    assert telemetry.errors == []
    assert telemetry.successes == 0
    assert runner.argvs() == []
    assert list(tmp_path.iterdir()) == []


def test_quickstart_unreadable_ignore_file_fails_once(tmp_path: Path) -> None:
    (tmp_path / ".gitignore").write_bytes(b"caf\xe9/\n")
    services, printer, telemetry, _runner_ = make_services(tmp_path)

    result = PreInitSetupService(services).run(InvocationOptions(quickstart=True))

    assert isinstance(result, ServiceFailure)
    assert result.code == "skeleton_copy_failed"
    assert printer.messages("error") == ["Failed to create the project skeleton"]
    assert telemetry.errors == [result]
    assert telemetry.successes == 0
