"""Git helper functions used by the Trellis setup pipeline."""

import os
import re
from pathlib import Path
from urllib.parse import urlparse

from . import exec as exec_util

REMOTE_SCHEMES = frozenset({"http", "https", "ssh", "git", "file"})

_SCP_RE = re.compile(r"^(?P<user>[^@\s/]+)@(?P<host>[^:\s/]+):(?P<path>\S+)$")


def git_command(args: list[str]) -> tuple[str, ...]:
    return ("git", *args)


def parse_remote_url(value: str) -> str:
    """Validate that ``value`` looks like a git remote and return it stripped.

    Accepts scp-style SSH remotes and ``http(s)``, ``ssh``, ``git`` and
    ``file`` URLs. Bare filesystem paths are not remotes.

    Args:
        value: Raw URL string.

    Returns:
        The stripped URL.

    Raises:
        ValueError: When the value is not a remote location.

    Example:
        >>> parse_remote_url(" https://github.com/org/repo.git ")
        'https://github.com/org/repo.git'
        >>> parse_remote_url("git@github.com:org/repo.git")
        'git@github.com:org/repo.git'
    """
    raw = value.strip() if isinstance(value, str) else ""
    if not raw or any(ch.isspace() for ch in raw):
        raise ValueError(f"not a remote url: {value!r}")
    if _SCP_RE.match(raw) and "://" not in raw:
        return raw
    parsed = urlparse(raw)
    scheme = (parsed.scheme or "").lower()
    if scheme not in REMOTE_SCHEMES:
        raise ValueError(f"unsupported remote url scheme: {value!r}")
    if scheme == "file":
        if not parsed.path:
            raise ValueError(f"file url has no path: {value!r}")
        return raw
    if not parsed.hostname:
        raise ValueError(f"remote url has no host: {value!r}")
    return raw


def ls_remote(
    url: str,
    *,
    runner: exec_util.CommandRunner | None = None,
) -> None:
    """Probe ``url`` with ``git ls-remote``, discarding its output.

    Credential prompts are disabled so an unreachable or private remote
    fails instead of waiting on the terminal.

    Raises:
        CommandExecutionError: When git is missing or the probe fails.
    """
    exec_util.run_checked(
        exec_util.CommandRequest(
            argv=git_command(["ls-remote", url]),
            env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
            capture_output=True,
        ),
        runner=runner,
    )


def clone_into(
    url: str,
    dest: Path,
    *,
    runner: exec_util.CommandRunner | None = None,
) -> None:
    """Clone ``url`` into the existing directory ``dest``.

    Output streams to the terminal.

    Raises:
        CommandExecutionError: When git is missing or the clone fails.
    """
    exec_util.run_checked(
        exec_util.CommandRequest(
            argv=git_command(["clone", url, "."]),
            cwd=dest,
            capture_output=False,
            text=False,
        ),
        runner=runner,
    )
