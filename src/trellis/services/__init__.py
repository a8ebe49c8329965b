from .result import (
    ServiceFailure,
    ServiceFailureCode,
    ServiceResult,
    ServiceSuccess,
    service_failure,
    service_success,
)

__all__ = [
    "ServiceFailure",
    "ServiceFailureCode",
    "ServiceResult",
    "ServiceSuccess",
    "service_failure",
    "service_success",
]
