"""Process-wide feature-flag store backed by ``trellis/cli.json``.

Effective values are resolved once per process from three layers, lowest
first: registry defaults (for new or existing projects), the project
``cli.json`` file, and the optional ``cli.<env>.json`` override for the
current environment.
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol

from pydantic import ValidationError

from . import config, log, paths
from .models import FeatureFlagsFile, FeatureFlagValues, LocalEnvInfo

FlagValue = bool | int | str


@dataclass(frozen=True)
class FeatureFlag:
    """Registered flag with defaults for new and existing projects."""

    section: str
    name: str
    default_for_existing: FlagValue
    default_for_new: FlagValue

    def default(self, new_project: bool) -> FlagValue:
        return self.default_for_new if new_project else self.default_for_existing


DEFAULT_FLAGS: tuple[FeatureFlag, ...] = (
    FeatureFlag("project", "overrides", False, True),
    FeatureFlag("project", "skeletonversion", 1, 2),
    FeatureFlag("install", "frozenlockfile", False, False),
    FeatureFlag("install", "respectlockfile", False, True),
    FeatureFlag("codegen", "useappsyncmodelgenplugin", False, True),
)


class FeatureFlagError(ValueError):
    """Raised when a feature-flag file cannot be parsed or validated."""


class EnvironmentProvider(Protocol):
    """Supplies the current environment name on demand."""

    def get_current_env_name(self) -> str | None: ...


class ContextEnvironmentProvider:
    """Environment provider that reads the local env record lazily.

    The callback is invoked on every lookup so records populated after the
    provider is built are still seen.
    """

    def __init__(self, get_env_info: Callable[[], LocalEnvInfo | None]) -> None:
        self._get_env_info = get_env_info

    def get_current_env_name(self) -> str | None:
        info = self._get_env_info()
        if info is None:
            return None
        return info.env_name or None


def load_flags_file(path: Path) -> FeatureFlagsFile | None:
    """Load a feature-flag file, or ``None`` when it does not exist.

    Raises:
        FeatureFlagError: When the file is not UTF-8 JSON or fails validation.
    """
    if not path.exists():
        return None
    try:
        payload = config.load_json(path)
        return FeatureFlagsFile.model_validate(payload)
    except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
        raise FeatureFlagError(f"invalid feature flag file {path}: {exc}") from exc


def _merge(base: FeatureFlagValues, overlay: FeatureFlagValues) -> FeatureFlagValues:
    merged = {section: dict(flags) for section, flags in base.items()}
    for section, flags in overlay.items():
        merged.setdefault(section, {}).update(flags)
    return merged


def registry_defaults(
    new_project: bool, flags: tuple[FeatureFlag, ...] = DEFAULT_FLAGS
) -> FeatureFlagValues:
    """Return default values for every registered flag.

    Example:
        >>> registry_defaults(True)["project"]["overrides"]
        True
        >>> registry_defaults(False)["project"]["overrides"]
        False
    """
    values: FeatureFlagValues = {}
    for flag in flags:
        values.setdefault(flag.section, {})[flag.name] = flag.default(new_project)
    return values


class FeatureFlagStore:
    """Lazily initialized feature-flag state.

    ``initialize`` runs at most once; concurrent callers serialize on an
    internal lock and later calls are no-ops until ``reset``.
    """

    def __init__(self, flags: tuple[FeatureFlag, ...] = DEFAULT_FLAGS) -> None:
        self._flags = flags
        self._lock = threading.Lock()
        self._initialized = False
        self._project_root: Path | None = None
        self._provider: EnvironmentProvider | None = None
        self._values: FeatureFlagValues = {}

    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(
        self,
        provider: EnvironmentProvider,
        *,
        project_root: Path,
        new_project: bool = False,
    ) -> bool:
        """Resolve effective flag values for ``project_root``.

        Returns:
            ``True`` when this call performed the initialization.
        """
        with self._lock:
            if self._initialized:
                return False
            self._provider = provider
            self._project_root = project_root
            self._values = self._resolve(new_project)
            self._initialized = True
        log.debug(f"feature flags initialized project_root={project_root}")
        return True

    def _resolve(self, new_project: bool) -> FeatureFlagValues:
        assert self._project_root is not None
        values = registry_defaults(new_project, self._flags)
        project_file = load_flags_file(paths.feature_flags_path(self._project_root))
        if project_file is not None:
            values = _merge(values, project_file.features)
        env_name = self._provider.get_current_env_name() if self._provider else None
        if env_name:
            env_file = load_flags_file(paths.feature_flags_path(self._project_root, env_name))
            if env_file is not None:
                values = _merge(values, env_file.features)
        return values

    def _require_initialized(self) -> Path:
        if not self._initialized or self._project_root is None:
            raise RuntimeError("feature flags are not initialized")
        return self._project_root

    def ensure_default_feature_flags(self, new_project: bool) -> Path:
        """Record missing registry flags in the project ``cli.json``.

        Existing values in the file are kept. Returns the file path.

        Raises:
            RuntimeError: When called before ``initialize``.
            FeatureFlagError: When the existing file is invalid.
            OSError: When the file cannot be written.
        """
        project_root = self._require_initialized()
        target = paths.feature_flags_path(project_root)
        existing = load_flags_file(target) or FeatureFlagsFile()
        document = existing.model_copy(deep=True)
        document.features = _merge(registry_defaults(new_project, self._flags), existing.features)
        if target.exists() and document.features == existing.features:
            return target
        config.write_json(target, document)
        log.debug(f"feature flag defaults written path={target}")
        return target

    def get(self, section: str, name: str) -> FlagValue | None:
        """Return the effective value of a flag, or ``None`` if unknown."""
        self._require_initialized()
        return self._values.get(section.lower(), {}).get(name.lower())

    def reset(self) -> None:
        """Drop initialized state (tests and long-lived hosts only)."""
        with self._lock:
            self._initialized = False
            self._project_root = None
            self._provider = None
            self._values = {}


_STORE = FeatureFlagStore()


def store() -> FeatureFlagStore:
    """Return the process-wide feature-flag store."""
    return _STORE
