from datetime import datetime

from pydantic import ConfigDict, Field, field_validator, model_validator

from jobtracker.core.constants import (
    ApplicationStatus,
    PositionType,
    coerce_position_type,
    coerce_status,
)
from jobtracker.core.dates import as_utc
from jobtracker.schemas.common import CamelModel

NOTES_MAX_LENGTH = 1000

# Columns that may not be cleared with an explicit null on update.
REQUIRED_FIELDS = ("company_name", "status", "position_type", "application_date", "interview_rounds", "is_private")

_DATE_FIELDS = ("application_date", "next_action_date")


class _ApplicationInput(CamelModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    @field_validator("company_name", check_fields=False)
    @classmethod
    def company_name_required(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Company name is required")
        return v

    @field_validator("status", mode="before", check_fields=False)
    @classmethod
    def coerce_status_alias(cls, v):
        if isinstance(v, str):
            return coerce_status(v)
        return v

    @field_validator("position_type", mode="before", check_fields=False)
    @classmethod
    def coerce_position_type_alias(cls, v):
        if isinstance(v, str):
            return coerce_position_type(v)
        return v

    @field_validator(
        "position_title", "application_platform", "contact_person", "location", "notes",
        check_fields=False,
    )
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return v.strip() if isinstance(v, str) else v

    @field_validator(*_DATE_FIELDS, check_fields=False)
    @classmethod
    def dates_in_utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)


class ApplicationCreate(_ApplicationInput):
    company_name: str
    status: ApplicationStatus = ApplicationStatus.APPLIED
    position_type: PositionType = PositionType.FULL_TIME
    position_title: str | None = None
    application_date: datetime | None = None
    next_action_date: datetime | None = None
    interview_rounds: int = Field(default=0, ge=0)
    notes: str | None = Field(default=None, max_length=NOTES_MAX_LENGTH)
    salary_expectation: float | None = Field(default=None, ge=0)
    application_platform: str | None = None
    contact_person: str | None = None
    location: str | None = None
    bond_years: float | None = Field(default=None, ge=0)
    is_private: bool = False

    def to_fields(self) -> dict:
        data = self.model_dump()
        if data["application_date"] is None:
            data.pop("application_date")  # column default: now
        return data


class ApplicationUpdate(_ApplicationInput):
    company_name: str | None = None
    status: ApplicationStatus | None = None
    position_type: PositionType | None = None
    position_title: str | None = None
    application_date: datetime | None = None
    next_action_date: datetime | None = None
    interview_rounds: int | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=NOTES_MAX_LENGTH)
    salary_expectation: float | None = Field(default=None, ge=0)
    application_platform: str | None = None
    contact_person: str | None = None
    location: str | None = None
    bond_years: float | None = Field(default=None, ge=0)
    is_private: bool | None = None

    @model_validator(mode="after")
    def required_fields_not_cleared(self):
        for name in REQUIRED_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def to_changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class SharedApplicationResponse(CamelModel):
    """The subset of an application a connected user is shown."""

    id: str
    company_name: str
    status: str
    position_title: str | None = None
    position_type: str | None = None
    application_date: datetime | None = None
    next_action_date: datetime | None = None
    interview_rounds: int = 0
    salary_expectation: float | None = None
    contact_person: str | None = None

    @field_validator(*_DATE_FIELDS)
    @classmethod
    def _utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)


class ApplicationResponse(SharedApplicationResponse):
    user_id: str
    notes: str | None = None
    application_platform: str | None = None
    location: str | None = None
    bond_years: float | None = None
    is_private: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def _utc_timestamps(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)


class ApplicationListResponse(CamelModel):
    companies: list[ApplicationResponse]


class ApplicationEnvelope(CamelModel):
    company: ApplicationResponse
    message: str | None = None


class ApplicationStats(CamelModel):
    total_applications: int
    active_applications: int
    offers_received: int


class ApplicationStatsResponse(CamelModel):
    stats: ApplicationStats
