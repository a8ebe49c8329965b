"""Pre-initialization setup service modules."""

from .clone_repository import (
    CloneRepositoryOutcome,
    CloneRepositoryRequest,
    CloneRepositoryService,
)
from .context import LogPrinter, Printer, SetupServices, SetupState
from .generate_skeleton import (
    GenerateSkeletonOutcome,
    GenerateSkeletonRequest,
    GenerateSkeletonService,
)
from .install_dependencies import (
    InstallDependenciesOutcome,
    InstallDependenciesRequest,
    InstallDependenciesService,
)
from .local_env_defaults import (
    LocalEnvDefaultsOutcome,
    LocalEnvDefaultsRequest,
    LocalEnvDefaultsService,
)
from .pre_init_setup import PreInitSetupOutcome, PreInitSetupService
from .validate_repository import (
    ValidateRepositoryOutcome,
    ValidateRepositoryRequest,
    ValidateRepositoryService,
)

__all__ = [
    "CloneRepositoryOutcome",
    "CloneRepositoryRequest",
    "CloneRepositoryService",
    "GenerateSkeletonOutcome",
    "GenerateSkeletonRequest",
    "GenerateSkeletonService",
    "InstallDependenciesOutcome",
    "InstallDependenciesRequest",
    "InstallDependenciesService",
    "LocalEnvDefaultsOutcome",
    "LocalEnvDefaultsRequest",
    "LocalEnvDefaultsService",
    "LogPrinter",
    "PreInitSetupOutcome",
    "PreInitSetupService",
    "Printer",
    "SetupServices",
    "SetupState",
    "ValidateRepositoryOutcome",
    "ValidateRepositoryRequest",
    "ValidateRepositoryService",
]
