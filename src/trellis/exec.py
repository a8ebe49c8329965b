"""Run external tools (git and package managers) behind a small interface."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Protocol

from . import log


@dataclass(frozen=True)
class CommandRequest:
    """One external command invocation.

    With ``capture_output=False`` the child writes straight to the user's
    terminal and the result carries empty output.
    """

    argv: tuple[str, ...]
    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    capture_output: bool = True
    text: bool = True
    stdin: int | None = None

    @property
    def display(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class CommandResult:
    argv: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def output(self) -> str:
        """Trimmed stderr, falling back to stdout."""
        return (self.stderr or self.stdout or "").strip()


class CommandRunner(Protocol):
    """Executes a request; ``None`` means the executable was not found."""

    def run(self, request: CommandRequest) -> CommandResult | None: ...


def _subprocess_kwargs(request: CommandRequest) -> dict[str, object]:
    kwargs: dict[str, object] = {"cwd": request.cwd, "env": request.env, "check": False}
    if request.capture_output:
        kwargs.update(capture_output=True, text=request.text)
    if request.stdin is not None:
        kwargs["stdin"] = request.stdin
    return kwargs


class SubprocessCommandRunner:
    """``subprocess.run`` adapter. Blocks until the child exits; no timeout."""

    def run(self, request: CommandRequest) -> CommandResult | None:
        log.debug(f"exec argv={request.display} cwd={request.cwd}")
        try:
            completed = subprocess.run(list(request.argv), **_subprocess_kwargs(request))
        except FileNotFoundError:
            log.debug(f"exec missing executable {request.argv[0] if request.argv else ''}")
            return None
        return CommandResult(
            argv=request.argv,
            returncode=completed.returncode,
            stdout=completed.stdout if isinstance(completed.stdout, str) else "",
            stderr=completed.stderr if isinstance(completed.stderr, str) else "",
        )


_RUNNER: CommandRunner = SubprocessCommandRunner()


def default_runner() -> CommandRunner:
    return _RUNNER


@dataclass(frozen=True)
class CommandExecutionError(RuntimeError):
    """A required command was missing or exited non-zero."""

    request: CommandRequest
    detail: str
    result: CommandResult | None = None

    def __str__(self) -> str:
        return self.detail

    @classmethod
    def missing(cls, request: CommandRequest) -> CommandExecutionError:
        name = request.argv[0] if request.argv else ""
        detail = f"missing required command: {name}" if name else "missing required command"
        return cls(request=request, detail=detail)

    @classmethod
    def failed(cls, request: CommandRequest, result: CommandResult) -> CommandExecutionError:
        detail = f"command failed: {request.display}"
        if result.output:
            detail = f"{detail}\n{result.output}"
        return cls(request=request, detail=detail, result=result)


def run_checked(
    request: CommandRequest, *, runner: CommandRunner | None = None
) -> CommandResult:
    """Run ``request`` and return its result when it exits zero.

    Raises:
        CommandExecutionError: When the executable is missing or the
            command exits non-zero.
    """
    result = (runner or _RUNNER).run(request)
    if result is None:
        raise CommandExecutionError.missing(request)
    if result.returncode != 0:
        raise CommandExecutionError.failed(request, result)
    return result
