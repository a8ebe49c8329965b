"""JSON documents under the reserved ``trellis/`` directory.

Writes go through a temporary file in the target directory followed by
``os.replace``, so readers never observe a half-written document.

Example:
    >>> from trellis.config import utc_now
    >>> utc_now().endswith("Z")
    True
"""

from __future__ import annotations

import datetime as dt
import json
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from pydantic import BaseModel

from . import paths


def utc_now() -> str:
    """Return the current UTC time like ``2026-01-18T12:34:56Z``."""
    now = dt.datetime.now(tz=dt.timezone.utc).replace(microsecond=0)
    return now.isoformat().replace("+00:00", "Z")


def load_json(path: Path) -> dict | None:
    """Parse ``path`` as JSON, or return ``None`` when it does not exist.

    Example:
        >>> load_json(Path("does-not-exist.json")) is None
        True
    """
    if not path.exists():
        return None
    return json.loads(path.read_text(encoding="utf-8"))


def _atomic_write_text(path: Path, content: str) -> None:
    temp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            "w",
            encoding="utf-8",
            delete=False,
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        ) as handle:
            handle.write(content)
            temp_path = Path(handle.name)
        os.replace(temp_path, path)
    finally:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink(missing_ok=True)


def write_json(path: Path, payload: dict | BaseModel, *, by_alias: bool = False) -> None:
    """Serialize ``payload`` to ``path`` with two-space indentation.

    Parent directories are created. Models are dumped in JSON mode, using
    field aliases when ``by_alias`` is set.

    Raises:
        OSError: When the directory or file cannot be written.
    """
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="json", by_alias=by_alias)
    paths.ensure_dir(path.parent)
    _atomic_write_text(path, json.dumps(payload, indent=2) + "\n")
