# ruff: noqa: E402

import builtins
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import trellis.feature_flags as feature_flags
import trellis.log as trellis_log


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> Iterator[None]:
    data_dir = tmp_path_factory.mktemp("trellis-data")
    monkeypatch.setenv("TRELLIS_DATA_DIR", str(data_dir))
    monkeypatch.setenv("TRELLIS_TELEMETRY", "0")
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("TRELLIS_LOG_LEVEL", raising=False)
    trellis_log.set_level(None)
    trellis_log.set_no_color(False)
    feature_flags.store().reset()

    def fail_input(prompt: str = "") -> str:
        raise AssertionError("prompted unexpectedly")

    monkeypatch.setattr(builtins, "input", fail_input)
    yield
    feature_flags.store().reset()
