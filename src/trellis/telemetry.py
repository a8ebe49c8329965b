"""Local usage telemetry for setup runs."""

from __future__ import annotations

import json
import os
import uuid
from pathlib import Path
from typing import Protocol

from . import log, paths
from .config import utc_now

_DISABLED_VALUES = {"0", "false", "no", "off"}


def telemetry_enabled(env_var: str = "TRELLIS_TELEMETRY") -> bool:
    """Return whether usage events should be recorded."""
    return os.environ.get(env_var, "").strip().lower() not in _DISABLED_VALUES


class UsageEmitter(Protocol):
    """Telemetry interface consumed by the setup pipeline."""

    def emit_error(self, error: BaseException | object) -> None: ...

    def emit_success(self) -> None: ...


def _error_fields(error: BaseException | object) -> dict[str, object]:
    code = getattr(error, "code", None)
    message = getattr(error, "message", None)
    if message is None:
        message = str(error)
    return {
        "error_type": type(error).__name__,
        "code": code,
        "message": message,
    }


class UsageData:
    """Append usage events as JSON lines to a local log file.

    Args:
        path: Event log path; defaults to the user data dir.
        session_id: Identifier shared by every event of this process.
    """

    def __init__(self, path: Path | None = None, *, session_id: str | None = None) -> None:
        self.path = path or paths.usage_log_path()
        self.session_id = session_id or uuid.uuid4().hex

    def _record(self, event: str, fields: dict[str, object]) -> None:
        payload = {"event": event, "session": self.session_id, "at": utc_now(), **fields}
        log.debug(f"usage event={event} {json.dumps(fields, sort_keys=True)}")
        try:
            paths.ensure_dir(self.path.parent)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(payload, sort_keys=True) + "\n")
        except OSError as exc:
            log.debug(f"usage log unavailable path={self.path}: {exc}")

    def emit_error(self, error: BaseException | object) -> None:
        self._record("error", _error_fields(error))

    def emit_success(self) -> None:
        self._record("success", {})


class NullUsageData:
    """Usage emitter that discards every event."""

    def emit_error(self, error: BaseException | object) -> None:
        del error

    def emit_success(self) -> None:
        return None


def default_emitter() -> UsageEmitter:
    """Return the emitter selected by ``TRELLIS_TELEMETRY``."""
    if telemetry_enabled():
        return UsageData()
    return NullUsageData()
