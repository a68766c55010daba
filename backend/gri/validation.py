from __future__ import annotations

import math
import re
from collections import Counter
from typing import Optional, get_args

from backend.errors import build_validation_errors
from backend.internal_core.contracts import (
    CATEGORY_ENVIRONMENTAL,
    CATEGORY_GOVERNANCE,
    CATEGORY_SOCIAL,
    GriDataItemDto,
    GriDataSearchCriteria,
    ValidationErrors,
    VerificationStatus,
)
from backend.utils.numeric_parser import parse_disclosure_number

STANDARD_CODE_RE = re.compile(r"^GRI\s\d{3}$")
DISCLOSURE_CODE_RE = re.compile(r"^\d{3}-\d{1,2}$")
ESG_CATEGORIES = (CATEGORY_ENVIRONMENTAL, CATEGORY_SOCIAL, CATEGORY_GOVERNANCE)
VERIFICATION_STATUSES = get_args(VerificationStatus)


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class _ErrorCollector:
    def __init__(self) -> None:
        self._messages: dict[str, list[str]] = {}

    def add(self, field: str, message: str) -> None:
        self._messages.setdefault(field, []).append(message)

    def result(self) -> Optional[ValidationErrors]:
        if not self._messages:
            return None
        return build_validation_errors(
            (field, "; ".join(messages)) for field, messages in self._messages.items()
        )


def validate_gri_data_item(dto: GriDataItemDto) -> Optional[ValidationErrors]:
    """Check the business rules of one disclosure item.

    Returns None when the item is valid, otherwise every violation keyed by
    wire field name. Several violations on one field are joined with "; ".
    """
    errors = _ErrorCollector()

    if _blank(dto.standard_code):
        errors.add("standardCode", "standardCode is required")
    if _blank(dto.disclosure_code):
        errors.add("disclosureCode", "disclosureCode is required")
    if _blank(dto.disclosure_value):
        errors.add("disclosureValue", "disclosureValue is required")
    if dto.company_id is None:
        errors.add("companyId", "companyId is required")
    if dto.category is not None and dto.category not in ESG_CATEGORIES:
        errors.add("category", f"category must be one of {', '.join(ESG_CATEGORIES)}")
    if dto.verification_status is not None and dto.verification_status not in VERIFICATION_STATUSES:
        errors.add(
            "verificationStatus",
            f"verificationStatus must be one of {', '.join(VERIFICATION_STATUSES)}",
        )

    start, end = dto.reporting_period_start, dto.reporting_period_end
    if start is not None and end is not None and end < start:
        errors.add(
            "reportingPeriodEnd",
            f"reportingPeriodEnd {end.isoformat()} is before reportingPeriodStart {start.isoformat()}",
        )

    if dto.numeric_value is not None and not _blank(dto.disclosure_value):
        parsed = parse_disclosure_number(dto.disclosure_value)
        if parsed is None or not math.isclose(parsed, dto.numeric_value, rel_tol=1e-9, abs_tol=1e-9):
            errors.add(
                "disclosureValue",
                f"disclosureValue {dto.disclosure_value!r} does not match numericValue {dto.numeric_value}",
            )

    year_counts = Counter(dto.time_series_years())
    duplicates = sorted(year for year, count in year_counts.items() if count > 1)
    if duplicates:
        errors.add(
            "timeSeriesData",
            "duplicate year(s): " + ", ".join(str(year) for year in duplicates),
        )
    if dto.unit:
        for point in dto.time_series_data:
            if point.unit and point.unit != dto.unit:
                errors.add(
                    "timeSeriesData",
                    f"unit {point.unit!r} for year {point.year} differs from item unit {dto.unit!r}",
                )

    return errors.result()


def mark_validity(dto: GriDataItemDto) -> GriDataItemDto:
    """Copy of ``dto`` with the ``valid`` flag set from validate_gri_data_item."""
    return dto.model_copy(update={"valid": validate_gri_data_item(dto) is None})


def validate_search_criteria(criteria: GriDataSearchCriteria) -> Optional[ValidationErrors]:
    errors = _ErrorCollector()

    if not _blank(criteria.standard_code) and not STANDARD_CODE_RE.match(criteria.standard_code.strip()):
        errors.add("standardCode", "standardCode must look like 'GRI 302'")
    if not _blank(criteria.disclosure_code) and not DISCLOSURE_CODE_RE.match(criteria.disclosure_code.strip()):
        errors.add("disclosureCode", "disclosureCode must look like '302-1'")

    start, end = criteria.reporting_period_start, criteria.reporting_period_end
    if start is not None and end is not None and end < start:
        errors.add("reportingPeriodEnd", "reportingPeriodEnd is before reportingPeriodStart")

    return errors.result()
