"""Write the quickstart project skeleton and feature-flag defaults."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from ... import gitignore, local_env, log, paths
from ...feature_flags import ContextEnvironmentProvider, FeatureFlagError
from ..result import ServiceResult, service_failure, service_success
from .context import SetupServices, SetupState

SKELETON_FAILED_MESSAGE = "Failed to create the project skeleton"

InsertIgnoreEntry = Callable[[Path], None]


def copy_tree(source: Path, dest: Path) -> list[Path]:
    """Copy ``source`` into ``dest`` recursively, merging existing directories.

    Files with the same relative path are overwritten. Returns the copied
    file paths relative to ``dest``.
    """
    shutil.copytree(source, dest, dirs_exist_ok=True)
    return sorted(
        path.relative_to(source) for path in source.rglob("*") if path.is_file()
    )


@dataclass(frozen=True)
class GenerateSkeletonRequest:
    """Input contract for skeleton generation.

    Attributes:
        project_root: Project root receiving ``.gitignore`` and ``trellis/``.
        state: Accumulator whose local env record feeds the flag provider.
    """

    project_root: Path
    state: SetupState


@dataclass(frozen=True)
class GenerateSkeletonOutcome:
    """Outcome payload for skeleton generation.

    Args:
        config_dir: Reserved directory the template was copied into.
        files: Copied files relative to ``config_dir``.
        feature_flags_path: Project ``cli.json`` holding the defaults.
        initialized_flags: Whether this run initialized the flag store.
    """

    config_dir: Path
    files: tuple[Path, ...]
    feature_flags_path: Path
    initialized_flags: bool


class GenerateSkeletonService:
    """Insert ignore rules, copy the skeleton, and record default flags."""

    def __init__(
        self,
        services: SetupServices,
        *,
        template_dir: Path | None = None,
        insert_ignore_entry: InsertIgnoreEntry = gitignore.insert_ignore_entry,
    ) -> None:
        self._services = services
        self._template_dir = template_dir
        self._insert_ignore_entry = insert_ignore_entry

    def run(self, request: GenerateSkeletonRequest) -> ServiceResult[GenerateSkeletonOutcome]:
        project_root = request.project_root
        template_dir = self._template_dir or paths.skeleton_template_dir()
        config_dir = paths.project_config_dir(project_root)
        store = self._services.feature_flags
        state = request.state
        try:
            self._insert_ignore_entry(paths.gitignore_path(project_root))
            files = copy_tree(template_dir, config_dir)
            log.debug(f"copied {len(files)} skeleton files into {config_dir}")

            initialized = False
            if not store.is_initialized():
                # Read lazily: the record may be filled in after this point.
                # Without one, fall back to a record saved by an earlier run.
                provider = ContextEnvironmentProvider(
                    lambda: state.local_env_info
                    or local_env.load_local_env_info(project_root)
                )
                initialized = store.initialize(
                    provider, project_root=project_root, new_project=True
                )
            flags_path = store.ensure_default_feature_flags(True)
        except (OSError, UnicodeError, FeatureFlagError) as exc:
            return service_failure(
                code="skeleton_copy_failed",
                message=SKELETON_FAILED_MESSAGE,
                detail=str(exc),
            )
        return service_success(
            GenerateSkeletonOutcome(
                config_dir=config_dir,
                files=tuple(files),
                feature_flags_path=flags_path,
                initialized_flags=initialized,
            )
        )
