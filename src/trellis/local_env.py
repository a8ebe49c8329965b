"""Read and write the machine-local environment record."""

from pathlib import Path

from pydantic import ValidationError

from . import config, paths
from .models import LocalEnvInfo


def write_local_env_info(project_root: Path, info: LocalEnvInfo) -> Path:
    """Write ``trellis/.config/local-env-info.json`` and return its path.

    Raises:
        OSError: When the file cannot be written.
    """
    target = paths.local_env_info_path(project_root)
    config.write_json(target, info, by_alias=True)
    return target


def load_local_env_info(project_root: Path) -> LocalEnvInfo | None:
    """Load the persisted record, or ``None`` when absent or invalid."""
    target = paths.local_env_info_path(project_root)
    if not target.exists():
        return None
    try:
        return LocalEnvInfo.model_validate_json(target.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, ValidationError):
        return None
