"""Validate a sample-app repository URL before cloning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from pydantic import BaseModel

from ... import git, log
from ...exec import CommandExecutionError, CommandRunner
from ..result import ServiceResult, service_failure, service_success
from .context import SetupServices

INVALID_REMOTE_MESSAGE = "Invalid remote github url"


class ProbeRemote(Protocol):
    """Typed callable for the remote listing probe."""

    def __call__(self, url: str, *, runner: CommandRunner | None = None) -> None: ...


class ValidateRepositoryRequest(BaseModel):
    """Input contract for repository validation.

    Attributes:
        repo_url: URL passed with ``--app``.
    """

    repo_url: str


@dataclass(frozen=True)
class ValidateRepositoryOutcome:
    """Outcome payload for repository validation.

    Args:
        repo_url: Normalized URL that passed the probe.
    """

    repo_url: str


class ValidateRepositoryService:
    """Check that a URL parses as a remote and that ``git ls-remote`` succeeds."""

    def __init__(
        self, services: SetupServices, *, probe_remote: ProbeRemote = git.ls_remote
    ) -> None:
        self._services = services
        self._probe_remote = probe_remote

    def run(
        self, request: ValidateRepositoryRequest
    ) -> ServiceResult[ValidateRepositoryOutcome]:
        """Validate ``request.repo_url`` with at most one network probe.

        Returns:
            ``ServiceSuccess`` with the URL, or an ``invalid_remote_url``
            failure. A malformed URL is rejected without probing.
        """
        try:
            repo_url = git.parse_remote_url(request.repo_url)
        except ValueError as exc:
            return service_failure(
                code="invalid_remote_url",
                message=INVALID_REMOTE_MESSAGE,
                detail=str(exc),
                recovery_hint="Pass an https, ssh or git URL of a reachable repository.",
            )
        log.debug(f"probing remote url={repo_url}")
        try:
            self._probe_remote(repo_url, runner=self._services.runner)
        except CommandExecutionError as exc:
            return service_failure(
                code="invalid_remote_url",
                message=INVALID_REMOTE_MESSAGE,
                detail=exc.detail,
                recovery_hint="Check the URL and your git credentials.",
            )
        return service_success(ValidateRepositoryOutcome(repo_url=repo_url))
