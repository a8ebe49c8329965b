"""Sequence the pre-initialization setup steps with fail-fast semantics.

Sample-app branch (``--app``): validate -> clone -> install -> local env
defaults. Quickstart branch (``--quickstart``): generate skeleton, emit
success, and request exit code 0. Both branches may run in one invocation,
sample-app first. The first failing step stops the pipeline; its message is
printed once and emitted to telemetry once. Nothing here exits the process.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...models import InvocationOptions
from ..result import ServiceFailure, ServiceResult, service_success
from .clone_repository import CloneRepositoryRequest, CloneRepositoryService
from .context import SetupServices, SetupState
from .generate_skeleton import GenerateSkeletonRequest, GenerateSkeletonService
from .install_dependencies import InstallDependenciesRequest, InstallDependenciesService
from .local_env_defaults import LocalEnvDefaultsRequest, LocalEnvDefaultsService
from .validate_repository import ValidateRepositoryRequest, ValidateRepositoryService

UNKNOWN_URL_NOTE = "Note: trellis does not have knowledge of the url provided"


@dataclass(frozen=True)
class PreInitSetupOutcome:
    """Outcome payload for the setup pipeline.

    Args:
        state: Accumulated setup state.
        exit_code: Exit code the entry point should terminate with, or
            ``None`` when the caller should continue with the rest of init.
    """

    state: SetupState
    exit_code: int | None = None

    @property
    def should_exit(self) -> bool:
        return self.exit_code is not None


class PreInitSetupService:
    """Run the sample-app and quickstart branches for one invocation."""

    def __init__(
        self,
        services: SetupServices,
        *,
        validate_service: ValidateRepositoryService | None = None,
        clone_service: CloneRepositoryService | None = None,
        install_service: InstallDependenciesService | None = None,
        local_env_service: LocalEnvDefaultsService | None = None,
        skeleton_service: GenerateSkeletonService | None = None,
    ) -> None:
        self._services = services
        self._validate = validate_service or ValidateRepositoryService(services)
        self._clone = clone_service or CloneRepositoryService(services)
        self._install = install_service or InstallDependenciesService(services)
        self._local_env = local_env_service or LocalEnvDefaultsService(services)
        self._skeleton = skeleton_service or GenerateSkeletonService(services)

    def run(
        self, options: InvocationOptions, state: SetupState | None = None
    ) -> ServiceResult[PreInitSetupOutcome]:
        """Run the branches selected by ``options``.

        Returns:
            ``ServiceSuccess`` with the state (unchanged when no branch is
            selected), or the first step's ``ServiceFailure``.
        """
        state = state if state is not None else SetupState()

        if options.app is not None:
            failure = self._run_sample_app(options.app, state)
            if failure is not None:
                return self._fail(failure)

        if options.quickstart:
            skeleton = self._skeleton.run(
                GenerateSkeletonRequest(project_root=self._services.cwd, state=state)
            )
            if isinstance(skeleton, ServiceFailure):
                return self._fail(skeleton)
            state.mark("generating_skeleton")
            self._services.telemetry.emit_success()
            return service_success(PreInitSetupOutcome(state=state, exit_code=0))

        return service_success(PreInitSetupOutcome(state=state))

    def _run_sample_app(self, repo_url: str, state: SetupState) -> ServiceFailure | None:
        printer = self._services.printer
        cwd = self._services.cwd
        printer.warning(UNKNOWN_URL_NOTE)

        validated = self._validate.run(ValidateRepositoryRequest(repo_url=repo_url))
        if isinstance(validated, ServiceFailure):
            return validated
        state.mark("validating")

        cloned = self._clone.run(
            CloneRepositoryRequest(repo_url=validated.outcome.repo_url, dest=cwd)
        )
        if isinstance(cloned, ServiceFailure):
            return cloned
        state.mark("cloning")

        installed = self._install.run(InstallDependenciesRequest(project_root=cwd))
        if isinstance(installed, ServiceFailure):
            return installed
        state.mark("installing")

        defaults = self._local_env.run(LocalEnvDefaultsRequest(project_root=cwd, state=state))
        if isinstance(defaults, ServiceFailure):
            return defaults
        state.mark("setting_defaults")
        return None

    def _fail(self, failure: ServiceFailure) -> ServiceFailure:
        self._services.printer.error(failure.message)
        self._services.telemetry.emit_error(failure)
        return failure
