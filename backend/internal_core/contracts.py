from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator
from pydantic.alias_generators import to_camel

from backend.utils.numeric_parser import parse_disclosure_number

T = TypeVar("T")


class InvalidArgument(ValueError):
    """Raised when a contract helper is called with structurally impossible input."""


class WireModel(BaseModel):
    """Base for every record crossing the API boundary.

    Attributes are snake_case in Python and camelCase on the wire. Absent
    optional fields are omitted from the payload rather than sent as null.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_wire(cls, payload: Any):
        return cls.model_validate(payload)


class PageResponse(WireModel, Generic[T]):
    content: List[T] = Field(default_factory=list)
    page: int
    size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool
    empty: bool
    number_of_elements: int


class ApiError(WireModel):
    timestamp: str
    status: int = Field(ge=100, le=599)
    error: str
    message: str = Field(min_length=1)
    # Schema depends on ``error``; see backend.errors.api_error.
    details: Optional[Any] = None


# Deprecated: kept for clients of the old error envelope. Same class as ApiError.
ErrorResponse = ApiError


class ValidationErrors(RootModel[Dict[str, str]]):
    """Field name -> message map reporting every failed business rule at once."""

    model_config = ConfigDict(frozen=True)

    def to_wire(self) -> Dict[str, str]:
        return dict(self.root)

    @classmethod
    def from_wire(cls, payload: Any) -> "ValidationErrors":
        return cls.model_validate(payload)

    def fields(self) -> List[str]:
        return list(self.root.keys())

    def items(self):
        return self.root.items()

    def __len__(self) -> int:
        return len(self.root)

    def __contains__(self, field: object) -> bool:
        return field in self.root

    def __getitem__(self, field: str) -> str:
        return self.root[field]


class ValidationError(WireModel):
    """Deprecated single-field error record, superseded by ValidationErrors."""

    field: str
    rejected_value: Optional[str] = None
    message: str


AuditAction = Literal[
    "CREATE",
    "READ",
    "UPDATE",
    "DELETE",
    "LOGIN",
    "LOGOUT",
    "EXPORT",
    "IMPORT",
    "VERIFY",
    "APPROVE",
    "REJECT",
]


class AuditLogDto(WireModel):
    id: int
    entity_type: str
    entity_id: str
    action: str
    details: Optional[str] = None
    username: Optional[str] = None
    ip_address: Optional[str] = None
    created_at: _dt.datetime

    @field_validator("entity_id", mode="before")
    @classmethod
    def _coerce_entity_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


CATEGORY_ENVIRONMENTAL = "E"
CATEGORY_SOCIAL = "S"
CATEGORY_GOVERNANCE = "G"

VerificationStatus = Literal["UNVERIFIED", "IN_PROGRESS", "VERIFIED", "FAILED"]

GriDataType = Literal["TIMESERIES", "TEXT", "NUMERIC"]


class TimeSeriesDataPointDto(WireModel):
    id: Optional[int] = None
    year: int
    value: float
    unit: Optional[str] = None
    notes: Optional[str] = None


class GriDataItemDto(WireModel):
    id: Optional[int] = None
    standard_code: Optional[str] = None
    disclosure_code: Optional[str] = None
    disclosure_title: Optional[str] = None
    # Always a string on the wire so qualitative disclosures fit the same slot.
    disclosure_value: Optional[str] = None
    numeric_value: Optional[float] = None
    unit: Optional[str] = None
    reporting_period_start: Optional[_dt.date] = None
    reporting_period_end: Optional[_dt.date] = None
    verification_status: Optional[str] = None
    verification_provider: Optional[str] = None
    category: Optional[str] = None
    company_id: Optional[int] = None
    company_name: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[_dt.datetime] = None
    updated_at: Optional[_dt.datetime] = None
    data_type: Optional[GriDataType] = None
    valid: Optional[bool] = None
    time_series_data: List[TimeSeriesDataPointDto] = Field(default_factory=list)

    def parsed_numeric_value(self) -> Optional[float]:
        if self.numeric_value is not None:
            return self.numeric_value
        return parse_disclosure_number(self.disclosure_value)

    def time_series_years(self) -> List[int]:
        return [point.year for point in self.time_series_data]


class GriDataSearchCriteria(WireModel):
    category: Optional[str] = None
    standard_code: Optional[str] = None
    disclosure_code: Optional[str] = None
    reporting_period_start: Optional[_dt.date] = None
    reporting_period_end: Optional[_dt.date] = None
    verification_status: Optional[str] = None
    company_id: Optional[int] = None
    keyword: Optional[str] = None
    # "property,direction", e.g. "disclosureCode,asc".
    sort: Optional[str] = None
