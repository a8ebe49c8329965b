"""Typed results returned by setup services.

Services never print or exit on expected errors. They return a
``ServiceFailure`` carrying a stable code, and the orchestrator decides how
to report it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

ServiceFailureCode = Literal[
    "invalid_remote_url",
    "non_empty_directory",
    "clone_failed",
    "install_failed",
    "persistence_failed",
    "skeleton_copy_failed",
]

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceSuccess(Generic[T]):
    outcome: T


@dataclass(frozen=True)
class ServiceFailure:
    """Expected failure of a setup step.

    Args:
        code: Stable failure code, also recorded in usage events.
        message: One-line summary printed to the user.
        detail: Underlying error text, such as command output or an OS error.
        recovery_hint: What the user can try next.
    """

    code: ServiceFailureCode
    message: str
    detail: str | None = None
    recovery_hint: str | None = None


ServiceResult = ServiceSuccess[T] | ServiceFailure


def service_success(outcome: T) -> ServiceSuccess[T]:
    return ServiceSuccess(outcome=outcome)


def service_failure(
    *,
    code: ServiceFailureCode,
    message: str,
    detail: str | None = None,
    recovery_hint: str | None = None,
) -> ServiceFailure:
    return ServiceFailure(code=code, message=message, detail=detail, recovery_hint=recovery_hint)
