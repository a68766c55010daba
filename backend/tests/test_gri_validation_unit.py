from datetime import date

from backend.gri import mark_validity, validate_gri_data_item, validate_search_criteria
from backend.internal_core.contracts import (
    GriDataItemDto,
    GriDataSearchCriteria,
    TimeSeriesDataPointDto,
)


def _valid_item(**overrides) -> GriDataItemDto:
    fields = dict(
        standard_code="GRI 305",
        disclosure_code="305-1",
        disclosure_title="Direct (Scope 1) GHG emissions",
        disclosure_value="1200",
        numeric_value=1200.0,
        unit="tCO2e",
        reporting_period_start=date(2023, 1, 1),
        reporting_period_end=date(2023, 12, 31),
        company_id=1,
    )
    fields.update(overrides)
    return GriDataItemDto(**fields)


def test_valid_item_has_no_errors() -> None:
    assert validate_gri_data_item(_valid_item()) is None


def test_missing_standard_code_and_inverted_period_reported_together() -> None:
    item = _valid_item(
        standard_code=None,
        reporting_period_start=date(2023, 12, 31),
        reporting_period_end=date(2023, 1, 1),
    )
    errors = validate_gri_data_item(item)
    assert errors is not None
    assert set(errors.fields()) == {"standardCode", "reportingPeriodEnd"}


def test_all_required_fields_reported_at_once() -> None:
    errors = validate_gri_data_item(GriDataItemDto(standard_code="  "))
    assert errors is not None
    assert set(errors.fields()) == {"standardCode", "disclosureCode", "disclosureValue", "companyId"}


def test_duplicate_year_reported_on_time_series() -> None:
    item = _valid_item(
        time_series_data=[
            TimeSeriesDataPointDto(year=2021, value=1.0),
            TimeSeriesDataPointDto(year=2022, value=2.0),
            TimeSeriesDataPointDto(year=2021, value=3.0),
        ]
    )
    errors = validate_gri_data_item(item)
    assert errors is not None
    assert errors.fields() == ["timeSeriesData"]
    assert "2021" in errors["timeSeriesData"]
    assert "2022" not in errors["timeSeriesData"]


def test_time_series_unit_mismatch_joined_with_duplicate_year() -> None:
    item = _valid_item(
        time_series_data=[
            TimeSeriesDataPointDto(year=2021, value=1.0, unit="tCO2e"),
            TimeSeriesDataPointDto(year=2021, value=2.0, unit="kg"),
        ]
    )
    message = validate_gri_data_item(item)["timeSeriesData"]
    assert "duplicate year(s): 2021" in message
    assert "'kg'" in message
    assert "; " in message


def test_disclosure_value_must_agree_with_numeric_value() -> None:
    assert validate_gri_data_item(_valid_item(disclosure_value="1,200 tCO2e")) is None
    errors = validate_gri_data_item(_valid_item(disclosure_value="1300"))
    assert errors is not None
    assert errors.fields() == ["disclosureValue"]


def test_qualitative_value_without_numeric_value_is_valid() -> None:
    item = _valid_item(disclosure_value="Policy adopted in 2021", numeric_value=None, unit=None)
    assert validate_gri_data_item(item) is None


def test_unpersisted_item_is_valid_without_id() -> None:
    item = _valid_item()
    assert item.id is None
    assert validate_gri_data_item(item) is None


def test_mark_validity_sets_flag_without_mutating() -> None:
    item = _valid_item(company_id=None)
    marked = mark_validity(item)
    assert marked.valid is False
    assert item.valid is None
    assert mark_validity(_valid_item()).valid is True


def test_validate_search_criteria_code_formats() -> None:
    assert validate_search_criteria(GriDataSearchCriteria()) is None
    assert validate_search_criteria(GriDataSearchCriteria(standard_code="GRI 302", disclosure_code="302-1")) is None
    errors = validate_search_criteria(
        GriDataSearchCriteria(
            standard_code="302",
            disclosure_code="302.1",
            reporting_period_start=date(2024, 1, 1),
            reporting_period_end=date(2023, 1, 1),
        )
    )
    assert set(errors.fields()) == {"standardCode", "disclosureCode", "reportingPeriodEnd"}


def test_unknown_category_and_verification_status_reported() -> None:
    errors = validate_gri_data_item(_valid_item(category="Environmental", verification_status="done"))
    assert set(errors.fields()) == {"category", "verificationStatus"}
    assert validate_gri_data_item(_valid_item(category="E", verification_status="IN_PROGRESS")) is None


def test_spaced_unit_letter_is_not_a_multiplier() -> None:
    item = _valid_item(disclosure_value="2 m", numeric_value=2.0, unit="m")
    assert validate_gri_data_item(item) is None
