import json
from pathlib import Path

import pytest

import trellis.telemetry as telemetry
from trellis.services import service_failure


def _events(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_usage_data_records_failure_and_success(tmp_path: Path) -> None:
    log_path = tmp_path / "usage" / "usage.jsonl"
    usage = telemetry.UsageData(log_path, session_id="abc")

    usage.emit_error(service_failure(code="clone_failed", message="Failed to clone"))
    usage.emit_success()

    events = _events(log_path)
    assert [event["event"] for event in events] == ["error", "success"]
    assert events[0]["code"] == "clone_failed"
    assert events[0]["message"] == "Failed to clone"
    assert events[0]["error_type"] == "ServiceFailure"
    assert {event["session"] for event in events} == {"abc"}


def test_usage_data_records_plain_exceptions(tmp_path: Path) -> None:
    log_path = tmp_path / "usage.jsonl"

    telemetry.UsageData(log_path).emit_error(OSError("disk full"))

    (event,) = _events(log_path)
    assert event["error_type"] == "OSError"
    assert event["code"] is None
    assert event["message"] == "disk full"


def test_default_emitter_respects_opt_out(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRELLIS_TELEMETRY", "off")
    assert isinstance(telemetry.default_emitter(), telemetry.NullUsageData)

    monkeypatch.setenv("TRELLIS_TELEMETRY", "1")
    emitter = telemetry.default_emitter()
    assert isinstance(emitter, telemetry.UsageData)
    assert emitter.path.name == "usage.jsonl"
