"""Pydantic DTOs (Data Transfer Objects) for the Buyer feature.

Payload models apply the same defaults for create, update and CSV import:
empty strings and nulls count as "absent", so the field default applies.
"""

import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from lead_intake.domain.entities import (
    Bhk,
    BuyerStatus,
    City,
    PropertyType,
    Purpose,
    Source,
    Timeline,
)

_PHONE_RE = re.compile(r"^\d{10,15}$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON while keeping snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class BuyerPayload(CamelModel):
    """Every writable buyer field with its default and validation rules."""

    full_name: str = ""
    email: str | None = None
    phone: str = ""
    city: City = City.CHANDIGARH
    property_type: PropertyType = PropertyType.APARTMENT
    bhk: Bhk | None = Field(None, validate_default=True)
    purpose: Purpose = Purpose.BUY
    budget_min: int | None = Field(None, gt=0)
    budget_max: int | None = Field(None, gt=0)
    timeline: Timeline = Timeline.ZERO_TO_THREE_MONTHS
    source: Source = Source.WEBSITE
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_values(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned: dict[str, Any] = {}
        for key, value in data.items():
            if value is None or value == "" or value == 0:
                continue
            cleaned[key] = value
        tags = cleaned.get("tags")
        if tags is not None and not isinstance(tags, list):
            cleaned["tags"] = []
        return cleaned

    @field_validator("full_name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if len(value) < 2:
            raise PydanticCustomError("name_too_short", "Name must be at least 2 characters")
        if len(value) > 80:
            raise PydanticCustomError("name_too_long", "Name must be less than 80 characters")
        return value

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str | None) -> str | None:
        if value is not None and not _EMAIL_RE.match(value):
            raise PydanticCustomError("email_format", "Invalid email")
        return value

    @field_validator("phone", mode="before")
    @classmethod
    def _phone_to_str(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: str) -> str:
        if not _PHONE_RE.match(value):
            raise PydanticCustomError("phone_format", "Phone must be 10-15 digits")
        return value

    @field_validator("bhk")
    @classmethod
    def _bhk_required_for_residential(cls, value: Bhk | None, info: ValidationInfo) -> Bhk | None:
        property_type = info.data.get("property_type")
        if value is None and property_type is not None and property_type.requires_bhk:
            raise PydanticCustomError("bhk_required", "BHK is required for Apartment and Villa")
        return value

    @field_validator("budget_max")
    @classmethod
    def _budget_range(cls, value: int | None, info: ValidationInfo) -> int | None:
        budget_min = info.data.get("budget_min")
        if value is not None and budget_min is not None and value < budget_min:
            raise PydanticCustomError(
                "budget_range", "Maximum budget must be greater than minimum budget"
            )
        return value

    @field_validator("notes")
    @classmethod
    def _check_notes(cls, value: str | None) -> str | None:
        if value is not None and len(value) > 1000:
            raise PydanticCustomError("notes_too_long", "Notes must be less than 1000 characters")
        return value

    def to_fields(self) -> dict[str, Any]:
        """Keyword arguments for ``Buyer`` / ``Buyer.replace_fields``."""
        return self.model_dump()


class BuyerCreate(BuyerPayload):
    """Schema for creating a buyer. Status is always New on creation."""


class BuyerUpdate(BuyerPayload):
    """Schema for a full-replace update of a buyer, including its status."""

    status: BuyerStatus = BuyerStatus.NEW


class BuyerImportRow(BuyerPayload):
    """One CSV data row. Rows without a source are tagged as imported."""

    source: Source = Source.IMPORT


class BuyerResponse(CamelModel):
    """Schema returned to the client."""

    id: str
    full_name: str
    email: str | None
    phone: str
    city: City
    property_type: PropertyType
    bhk: Bhk | None
    purpose: Purpose
    budget_min: int | None
    budget_max: int | None
    timeline: Timeline
    source: Source
    status: BuyerStatus
    notes: str | None
    tags: list[str]
    owner_id: str | None
    created_at: datetime
    updated_at: datetime


class HistoryEntryResponse(CamelModel):
    id: str
    buyer_id: str
    changed_by: str | None
    changed_at: datetime
    diff: dict[str, Any]


class BuyerDetailResponse(CamelModel):
    buyer: BuyerResponse
    history: list[HistoryEntryResponse]


class PaginationResponse(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class BuyerListResponse(CamelModel):
    buyers: list[BuyerResponse]
    pagination: PaginationResponse


class BuyerDeleteResponse(CamelModel):
    message: str
    deleted_buyer: BuyerResponse


class ImportResultsResponse(CamelModel):
    success: int
    failed: int
    errors: list[str]


class ImportResponse(CamelModel):
    message: str
    results: ImportResultsResponse
