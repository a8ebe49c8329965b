"""Implementation for the ``trellis init`` command.

``trellis init`` runs the pre-initialization pipeline in the current
directory: ``--app`` clones and prepares a sample repository, while
``--quickstart`` writes the local project skeleton.
"""

from pathlib import Path

from .. import log
from ..models import InvocationOptions
from ..services import ServiceFailure
from ..services.setup import PreInitSetupService, SetupServices


def init_project(args: object, *, services: SetupServices | None = None) -> int:
    """Run pre-initialization for the current directory.

    Args:
        args: CLI argument object with optional ``app`` and ``quickstart``.
        services: Optional service bundle override.

    Returns:
        Process exit code: ``1`` on any setup failure, otherwise ``0``.

    Example:
        $ trellis init --quickstart
    """
    options = InvocationOptions(
        app=getattr(args, "app", None),
        quickstart=bool(getattr(args, "quickstart", False)),
    )
    active = services or SetupServices(cwd=Path.cwd())
    result = PreInitSetupService(active).run(options)
    if isinstance(result, ServiceFailure):
        if result.detail:
            log.debug(f"{result.code}: {result.detail}")
        if result.recovery_hint:
            log.debug(f"hint: {result.recovery_hint}")
        return 1

    outcome = result.outcome
    if outcome.exit_code is not None:
        active.printer.success(f"Created trellis project skeleton in {active.cwd}")
        return outcome.exit_code
    if outcome.state.local_env_info is not None:
        active.printer.success(f"Sample app ready in {outcome.state.local_env_info.project_path}")
    return 0
