"""Install a cloned project's dependencies with its package manager."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel

from ... import exec as exec_util
from ... import log, package_managers
from ...package_managers import PackageManager
from ..result import ServiceResult, service_failure, service_success
from .context import SetupServices

INSTALL_FAILED_MESSAGE = "Failed to install project dependencies"


class InstallDependenciesRequest(BaseModel):
    project_root: Path


@dataclass(frozen=True)
class InstallDependenciesOutcome:
    """Outcome payload for dependency installation.

    Args:
        package_manager: Detected manager, or ``None`` when skipped.
        executable: Normalized executable that ran, or ``None`` when skipped.
    """

    package_manager: PackageManager | None
    executable: str | None

    @property
    def skipped(self) -> bool:
        return self.executable is None


class InstallDependenciesService:
    """Detect the package manager and run ``<manager> install``.

    Projects without a recognizable manifest are skipped without error.
    """

    def __init__(self, services: SetupServices, *, platform: str | None = None) -> None:
        self._services = services
        self._platform = platform

    def run(
        self, request: InstallDependenciesRequest
    ) -> ServiceResult[InstallDependenciesOutcome]:
        which = self._services.which or shutil.which
        manager = package_managers.detect_package_manager(request.project_root, which=which)
        executable = package_managers.normalize_for_os(manager, platform=self._platform)
        if executable is None:
            log.debug(f"no package manager detected in {request.project_root}; skipping install")
            return service_success(InstallDependenciesOutcome(package_manager=None, executable=None))

        log.debug(f"installing with {executable} (selected by {manager.lock_file})")
        request_argv = tuple(package_managers.install_command(executable))
        try:
            exec_util.run_checked(
                exec_util.CommandRequest(
                    argv=request_argv,
                    cwd=request.project_root,
                    capture_output=False,
                    text=False,
                ),
                runner=self._services.runner,
            )
        except exec_util.CommandExecutionError as exc:
            return service_failure(
                code="install_failed",
                message=INSTALL_FAILED_MESSAGE,
                detail=exc.detail,
                recovery_hint=f"Run '{' '.join(request_argv)}' manually to see the full error.",
            )
        return service_success(
            InstallDependenciesOutcome(package_manager=manager, executable=executable)
        )
