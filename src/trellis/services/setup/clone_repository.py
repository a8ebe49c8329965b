"""Clone a sample-app repository into the (empty) working directory."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel

from ... import git, log
from ...exec import CommandExecutionError, CommandRunner
from ..result import ServiceResult, service_failure, service_success
from .context import SetupServices

NON_EMPTY_DIRECTORY_MESSAGE = "Please ensure you run this command in an empty directory"
CLONE_FAILED_MESSAGE = "Failed to clone the sample repository"


class CloneRepo(Protocol):
    """Typed callable for the clone command."""

    def __call__(
        self, url: str, dest: Path, *, runner: CommandRunner | None = None
    ) -> None: ...


class CloneRepositoryRequest(BaseModel):
    """Input contract for cloning.

    Attributes:
        repo_url: Validated repository URL.
        dest: Directory to clone into; must be empty.
    """

    repo_url: str
    dest: Path


@dataclass(frozen=True)
class CloneRepositoryOutcome:
    repo_url: str
    dest: Path


class CloneRepositoryService:
    """Refuse non-empty destinations, then ``git clone <url> .``."""

    def __init__(self, services: SetupServices, *, clone_repo: CloneRepo = git.clone_into) -> None:
        self._services = services
        self._clone_repo = clone_repo

    def run(self, request: CloneRepositoryRequest) -> ServiceResult[CloneRepositoryOutcome]:
        # Assumes nothing else writes to dest between the check and the clone.
        try:
            entries = [entry.name for entry in request.dest.iterdir()]
        except OSError as exc:
            return service_failure(
                code="clone_failed",
                message=CLONE_FAILED_MESSAGE,
                detail=str(exc),
            )
        if entries:
            return service_failure(
                code="non_empty_directory",
                message=NON_EMPTY_DIRECTORY_MESSAGE,
                detail=f"{request.dest} contains {len(entries)} entries",
                recovery_hint="Create a new directory and run the command from there.",
            )
        log.debug(f"cloning url={request.repo_url} dest={request.dest}")
        try:
            self._clone_repo(request.repo_url, request.dest, runner=self._services.runner)
        except CommandExecutionError as exc:
            return service_failure(
                code="clone_failed",
                message=CLONE_FAILED_MESSAGE,
                detail=exc.detail,
            )
        return service_success(CloneRepositoryOutcome(repo_url=request.repo_url, dest=request.dest))
