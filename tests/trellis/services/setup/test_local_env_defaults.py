import json
from pathlib import Path

from tests.trellis.helpers import make_services
from trellis.models import LocalEnvInfo
from trellis.services import ServiceFailure, ServiceSuccess
from trellis.services.setup import (
    LocalEnvDefaultsRequest,
    LocalEnvDefaultsService,
    SetupState,
)


def test_sets_defaults_on_state_and_persists(tmp_path: Path) -> None:
    services, printer, _telemetry, _runner = make_services(tmp_path)
    state = SetupState()

    result = LocalEnvDefaultsService(services).run(
        LocalEnvDefaultsRequest(project_root=tmp_path, state=state)
    )

    assert isinstance(result, ServiceSuccess)
    expected = LocalEnvInfo(
        project_path=str(tmp_path.resolve()), default_editor="vscode", env_name="sampledev"
    )
    assert state.local_env_info == expected
    assert state.input_params.env_name == "sampledev"
    assert result.outcome.state is state
    assert printer.messages("warning") == [
        "Setting default editor to vscode",
        "Setting environment to sampledev",
        "Run trellis configure project to change the default configuration later",
    ]
    written = json.loads(result.outcome.path.read_text(encoding="utf-8"))
    assert written == expected.model_dump(by_alias=True)


def test_record_is_populated_before_persistence(tmp_path: Path) -> None:
    services, *_ = make_services(tmp_path)
    state = SetupState()
    seen: list[LocalEnvInfo | None] = []

    def write(project_root: Path, info: LocalEnvInfo) -> Path:
        seen.append(state.local_env_info)
        return project_root / "local-env-info.json"

    LocalEnvDefaultsService(services, write_local_env_info=write).run(
        LocalEnvDefaultsRequest(project_root=tmp_path, state=state)
    )

    assert seen == [state.local_env_info]
    assert seen[0] is not None


def test_persistence_failure_is_reported(tmp_path: Path) -> None:
    services, *_ = make_services(tmp_path)

    def write(project_root: Path, info: LocalEnvInfo) -> Path:
        raise PermissionError("read-only file system")

    result = LocalEnvDefaultsService(services, write_local_env_info=write).run(
        LocalEnvDefaultsRequest(project_root=tmp_path, state=SetupState())
    )

    assert isinstance(result, ServiceFailure)
    assert result.code == "persistence_failed"
    assert result.detail == "read-only file system"
