"""Path helpers for locating Trellis project and data files."""

import os
from importlib import resources
from pathlib import Path

from platformdirs import user_data_dir

TRELLIS_APP_NAME = "trellis"
PROJECT_CONFIG_DIRNAME = "trellis"
DOT_CONFIG_DIRNAME = ".config"
GITIGNORE_FILENAME = ".gitignore"
LOCAL_ENV_INFO_FILENAME = "local-env-info.json"
FEATURE_FLAGS_FILENAME = "cli.json"
USAGE_DIRNAME = "usage"
USAGE_LOG_FILENAME = "usage.jsonl"
SKELETON_TEMPLATE_PARTS = ("templates", "skeleton")


def trellis_data_dir() -> Path:
    """Return the base Trellis data directory.

    ``TRELLIS_DATA_DIR`` overrides the platform default.

    Example:
        >>> isinstance(trellis_data_dir(), Path)
        True
    """
    override = os.environ.get("TRELLIS_DATA_DIR", "").strip()
    if override:
        return Path(override).expanduser()
    return Path(user_data_dir(TRELLIS_APP_NAME))


def usage_log_path() -> Path:
    """Return the local usage event log path."""
    return trellis_data_dir() / USAGE_DIRNAME / USAGE_LOG_FILENAME


def project_config_dir(project_root: Path) -> Path:
    """Return the reserved configuration directory for a project.

    Example:
        >>> project_config_dir(Path("/tmp/app")).as_posix()
        '/tmp/app/trellis'
    """
    return project_root / PROJECT_CONFIG_DIRNAME


def dot_config_dir(project_root: Path) -> Path:
    """Return the machine-local ``.config`` directory of a project."""
    return project_config_dir(project_root) / DOT_CONFIG_DIRNAME


def gitignore_path(project_root: Path) -> Path:
    """Return the ``.gitignore`` path at the project root.

    Example:
        >>> gitignore_path(Path("/tmp/app")).name
        '.gitignore'
    """
    return project_root / GITIGNORE_FILENAME


def local_env_info_path(project_root: Path) -> Path:
    """Return the path of the persisted local environment record."""
    return dot_config_dir(project_root) / LOCAL_ENV_INFO_FILENAME


def feature_flags_path(project_root: Path, env_name: str | None = None) -> Path:
    """Return the project feature-flag file, or its per-environment override.

    Example:
        >>> feature_flags_path(Path("/tmp/app")).name
        'cli.json'
        >>> feature_flags_path(Path("/tmp/app"), "dev").name
        'cli.dev.json'
    """
    if env_name:
        return project_config_dir(project_root) / f"cli.{env_name}.json"
    return project_config_dir(project_root) / FEATURE_FLAGS_FILENAME


def skeleton_template_dir() -> Path:
    """Return the packaged skeleton template directory."""
    return Path(str(resources.files("trellis").joinpath(*SKELETON_TEMPLATE_PARTS)))


def ensure_dir(path: Path) -> None:
    """Create a directory (and parents) if missing."""
    path.mkdir(parents=True, exist_ok=True)
