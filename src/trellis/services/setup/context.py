"""Shared services and accumulated state for the setup pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Literal, Protocol

from ... import exec as exec_util
from ... import log
from ...feature_flags import FeatureFlagStore
from ...feature_flags import store as feature_flag_store
from ...models import InputParams, LocalEnvInfo
from ...telemetry import UsageEmitter, default_emitter

SetupStep = Literal[
    "validating",
    "cloning",
    "installing",
    "setting_defaults",
    "generating_skeleton",
]


class Printer(Protocol):
    """User-facing output channel."""

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LogPrinter:
    """Printer backed by the rich terminal logger."""

    def info(self, message: str) -> None:
        log.info(message)

    def success(self, message: str) -> None:
        log.success(message)

    def warning(self, message: str) -> None:
        log.warning(message)

    def error(self, message: str) -> None:
        log.error(message)


@dataclass(frozen=True)
class SetupServices:
    """Immutable bundle of collaborators shared by every setup step.

    Attributes:
        cwd: Project root the pipeline operates on.
        printer: User-facing output channel.
        telemetry: Usage event emitter.
        runner: External command runner.
        feature_flags: Feature-flag store to initialize.
        which: Executable lookup used for package-manager detection.
    """

    cwd: Path
    printer: Printer = field(default_factory=LogPrinter)
    telemetry: UsageEmitter = field(default_factory=default_emitter)
    runner: exec_util.CommandRunner = field(default_factory=exec_util.default_runner)
    feature_flags: FeatureFlagStore = field(default_factory=feature_flag_store)
    which: Callable[[str], str | None] | None = None


@dataclass
class SetupState:
    """Mutable result accumulator threaded through the pipeline.

    Attributes:
        local_env_info: Local environment record once defaults are set.
        input_params: Parameters forwarded to the rest of init.
        completed_steps: Steps that finished, in order.
    """

    local_env_info: LocalEnvInfo | None = None
    input_params: InputParams = field(default_factory=InputParams)
    completed_steps: list[SetupStep] = field(default_factory=list)

    def mark(self, step: SetupStep) -> None:
        self.completed_steps.append(step)
