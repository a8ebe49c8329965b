"""Apply and persist local environment defaults for a sample app."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from ... import local_env
from ...models import DEFAULT_EDITOR, DEFAULT_ENV_NAME, LocalEnvInfo
from ..result import ServiceResult, service_failure, service_success
from .context import SetupServices, SetupState

PERSISTENCE_FAILED_MESSAGE = "Failed to write local environment settings"

WriteLocalEnvInfo = Callable[[Path, LocalEnvInfo], Path]


@dataclass(frozen=True)
class LocalEnvDefaultsRequest:
    """Input contract for local environment defaults.

    Attributes:
        project_root: Absolute project path recorded in the record.
        state: Accumulator that receives the record and env name.
    """

    project_root: Path
    state: SetupState


@dataclass(frozen=True)
class LocalEnvDefaultsOutcome:
    state: SetupState
    local_env_info: LocalEnvInfo
    path: Path


class LocalEnvDefaultsService:
    """Record the default editor and environment, then persist them."""

    def __init__(
        self,
        services: SetupServices,
        *,
        write_local_env_info: WriteLocalEnvInfo = local_env.write_local_env_info,
    ) -> None:
        self._services = services
        self._write_local_env_info = write_local_env_info

    def run(self, request: LocalEnvDefaultsRequest) -> ServiceResult[LocalEnvDefaultsOutcome]:
        info = LocalEnvInfo(
            project_path=str(request.project_root.resolve()),
            default_editor=DEFAULT_EDITOR,
            env_name=DEFAULT_ENV_NAME,
        )
        printer = self._services.printer
        printer.warning(f"Setting default editor to {info.default_editor}")
        printer.warning(f"Setting environment to {info.env_name}")
        printer.warning(
            "Run trellis configure project to change the default configuration later"
        )

        state = request.state
        state.local_env_info = info
        state.input_params.env_name = info.env_name

        try:
            path = self._write_local_env_info(request.project_root, info)
        except OSError as exc:
            return service_failure(
                code="persistence_failed",
                message=PERSISTENCE_FAILED_MESSAGE,
                detail=str(exc),
            )
        return service_success(LocalEnvDefaultsOutcome(state=state, local_env_info=info, path=path))
