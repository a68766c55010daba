from __future__ import annotations

import warnings
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple, Union

from backend.internal_core.contracts import (
    ApiError,
    InvalidArgument,
    ValidationError,
    ValidationErrors,
    WireModel,
)

Clock = Callable[[], datetime]

# ``error`` labels with a fixed ``details`` schema:
#   VALIDATION_FAILED -> {field: message} object (a ValidationErrors payload)
#   INTERNAL_ERROR    -> absent, or the exception message when exposure is enabled
# Any other label (HTTP reason phrases included) carries free-form details.
ERROR_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_INTERNAL = "INTERNAL_ERROR"

_MIN_STATUS = 100
_MAX_STATUS = 599


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _ts_iso(clock: Optional[Clock]) -> str:
    now = (clock or _utc_now)()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    return now.isoformat()


def _reason_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return f"HTTP {status}"


def _wire_details(details: Any) -> Any:
    if isinstance(details, (ValidationErrors, WireModel)):
        return details.to_wire()
    return details


def build_api_error(
    status: int,
    error: Optional[str],
    message: str,
    details: Any = None,
    *,
    clock: Optional[Clock] = None,
) -> ApiError:
    """Build the error payload returned instead of a success body.

    ``error`` falls back to the HTTP reason phrase of ``status`` when blank.
    ``clock`` supplies the timestamp; naive datetimes are read as UTC.
    """
    if isinstance(status, bool) or not isinstance(status, int):
        raise InvalidArgument(f"status must be an int, got {status!r}")
    if not _MIN_STATUS <= status <= _MAX_STATUS:
        raise InvalidArgument(f"status must be within {_MIN_STATUS}..{_MAX_STATUS}, got {status}")
    if not isinstance(message, str) or not message.strip():
        raise InvalidArgument("message must be a non-empty string")

    label = (error or "").strip() or _reason_phrase(status)
    return ApiError(
        timestamp=_ts_iso(clock),
        status=status,
        error=label,
        message=message,
        details=_wire_details(details),
    )


def build_validation_errors(
    entries: Union[Mapping[str, str], Iterable[Tuple[str, str]]],
) -> ValidationErrors:
    pairs = entries.items() if isinstance(entries, Mapping) else entries
    collected: dict[str, str] = {}
    for field, message in pairs:
        if not isinstance(field, str) or not field.strip():
            raise InvalidArgument(f"field name must be a non-empty string, got {field!r}")
        if field in collected:
            raise InvalidArgument(f"duplicate validation error for field: {field}")
        collected[field] = str(message)
    return ValidationErrors(collected)


def api_error_from_validation_errors(
    errors: ValidationErrors,
    message: str = "Input validation failed",
    *,
    clock: Optional[Clock] = None,
) -> ApiError:
    return build_api_error(
        HTTPStatus.BAD_REQUEST.value,
        ERROR_VALIDATION_FAILED,
        message,
        errors,
        clock=clock,
    )


def to_legacy_validation_errors(
    errors: ValidationErrors,
    rejected_values: Optional[Mapping[str, Any]] = None,
) -> list[ValidationError]:
    warnings.warn(
        "ValidationError lists are deprecated; use ValidationErrors",
        DeprecationWarning,
        stacklevel=2,
    )
    rejected = rejected_values or {}
    out: list[ValidationError] = []
    for field, message in errors.items():
        raw = rejected.get(field)
        out.append(
            ValidationError(
                field=field,
                rejected_value=None if raw is None else str(raw),
                message=message,
            )
        )
    return out


def from_legacy_validation_errors(
    items: Iterable[Union[ValidationError, Mapping[str, Any]]],
) -> ValidationErrors:
    warnings.warn(
        "ValidationError lists are deprecated; use ValidationErrors",
        DeprecationWarning,
        stacklevel=2,
    )
    records = [
        item if isinstance(item, ValidationError) else ValidationError.model_validate(item)
        for item in items
    ]
    return build_validation_errors((record.field, record.message) for record in records)
