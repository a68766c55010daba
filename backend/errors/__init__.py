"""
Error taxonomy for the ESG contract layer.

Design intent:
- ApiError carries transport/programmer failures that end a request.
- ValidationErrors carries every failed business rule of one submission.
- Legacy shapes are adapters over these two, never parallel definitions.
"""
from backend.internal_core.contracts import (
    ApiError,
    ErrorResponse,
    InvalidArgument,
    ValidationError,
    ValidationErrors,
)

from .api_error import (
    ERROR_INTERNAL,
    ERROR_VALIDATION_FAILED,
    api_error_from_validation_errors,
    build_api_error,
    build_validation_errors,
    from_legacy_validation_errors,
    to_legacy_validation_errors,
)

__all__ = [
    "ApiError",
    "ErrorResponse",
    "InvalidArgument",
    "ValidationError",
    "ValidationErrors",
    "ERROR_INTERNAL",
    "ERROR_VALIDATION_FAILED",
    "api_error_from_validation_errors",
    "build_api_error",
    "build_validation_errors",
    "from_legacy_validation_errors",
    "to_legacy_validation_errors",
]
