# ruff: noqa: E402

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from trellis.exec import CommandRequest, CommandResult
from trellis.feature_flags import FeatureFlagStore
from trellis.services.setup import SetupServices

REPO_URL = "https://github.com/x/y.git"


class FakeRunner:
    """Command runner that records requests and replays canned results.

    ``results`` maps an argv prefix (e.g. ``("git", "clone")``) to a return
    code, or to ``None`` to simulate a missing executable.
    """

    def __init__(self, results: dict[tuple[str, ...], int | None] | None = None) -> None:
        self.results = results or {}
        self.requests: list[CommandRequest] = []
        self.on_run: dict[tuple[str, ...], object] = {}

    def run(self, request: CommandRequest) -> CommandResult | None:
        self.requests.append(request)
        returncode: int | None = 0
        for prefix, value in self.results.items():
            if request.argv[: len(prefix)] == prefix:
                returncode = value
                break
        for prefix, hook in self.on_run.items():
            if request.argv[: len(prefix)] == prefix:
                hook(request)  # type: ignore[operator]
        if returncode is None:
            return None
        stderr = "fatal: boom" if returncode else ""
        return CommandResult(argv=request.argv, returncode=returncode, stdout="", stderr=stderr)

    def argvs(self) -> list[tuple[str, ...]]:
        return [request.argv for request in self.requests]


@dataclass
class RecordingPrinter:
    lines: list[tuple[str, str]] = field(default_factory=list)

    def info(self, message: str) -> None:
        self.lines.append(("info", message))

    def success(self, message: str) -> None:
        self.lines.append(("success", message))

    def warning(self, message: str) -> None:
        self.lines.append(("warning", message))

    def error(self, message: str) -> None:
        self.lines.append(("error", message))

    def messages(self, level: str) -> list[str]:
        return [message for kind, message in self.lines if kind == level]


@dataclass
class RecordingTelemetry:
    errors: list[object] = field(default_factory=list)
    successes: int = 0

    def emit_error(self, error: object) -> None:
        self.errors.append(error)

    def emit_success(self) -> None:
        self.successes += 1


def make_services(
    cwd: Path,
    *,
    runner: FakeRunner | None = None,
    which_tools: tuple[str, ...] = ("npm", "yarn", "pnpm"),
    feature_flags: FeatureFlagStore | None = None,
) -> tuple[SetupServices, RecordingPrinter, RecordingTelemetry, FakeRunner]:
    active_runner = runner or FakeRunner()
    printer = RecordingPrinter()
    telemetry = RecordingTelemetry()
    services = SetupServices(
        cwd=cwd,
        printer=printer,
        telemetry=telemetry,
        runner=active_runner,
        feature_flags=feature_flags or FeatureFlagStore(),
        which=lambda name: f"/usr/bin/{name}" if name in which_tools else None,
    )
    return services, printer, telemetry, active_runner
