"""Package-manager detection for cloned sample projects."""

from __future__ import annotations

import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal

PackageManagerName = Literal["npm", "yarn", "pnpm"]

PACKAGE_JSON = "package.json"

Which = Callable[[str], str | None]


@dataclass(frozen=True)
class PackageManager:
    """A package manager applicable to a project directory.

    Attributes:
        name: Manager identifier.
        lock_file: Manifest or lock file that selected the manager.
    """

    name: PackageManagerName
    lock_file: str


# Checked in order; the first lock file present whose tool is on PATH wins.
_LOCK_FILES: tuple[tuple[PackageManagerName, str], ...] = (
    ("yarn", "yarn.lock"),
    ("pnpm", "pnpm-lock.yaml"),
)


def detect_package_manager(
    project_root: Path, *, which: Which = shutil.which
) -> PackageManager | None:
    """Detect the package manager for ``project_root``.

    A yarn or pnpm lock file wins when its tool is installed; otherwise a
    ``package.json`` selects npm. Returns ``None`` when the project has no
    recognizable manifest.
    """
    for name, lock_file in _LOCK_FILES:
        if (project_root / lock_file).is_file() and which(name):
            return PackageManager(name=name, lock_file=lock_file)
    if (project_root / PACKAGE_JSON).is_file():
        return PackageManager(name="npm", lock_file=PACKAGE_JSON)
    return None


def normalize_for_os(
    package_manager: PackageManager | None, *, platform: str | None = None
) -> str | None:
    """Return the invocable executable name for the current platform.

    Example:
        >>> normalize_for_os(PackageManager("npm", "package.json"), platform="win32")
        'npm.cmd'
        >>> normalize_for_os(PackageManager("yarn", "yarn.lock"), platform="linux")
        'yarn'
        >>> normalize_for_os(None) is None
        True
    """
    if package_manager is None:
        return None
    active = platform if platform is not None else sys.platform
    if active == "win32":
        return f"{package_manager.name}.cmd"
    return package_manager.name


def install_command(executable: str) -> list[str]:
    """Build the install argv for a normalized executable."""
    return [executable, "install"]
