"""Domain entity: a prospective property buyer (lead)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4


class City(str, Enum):
    CHANDIGARH = "Chandigarh"
    MOHALI = "Mohali"
    ZIRAKPUR = "Zirakpur"
    PANCHKULA = "Panchkula"
    OTHER = "Other"


class PropertyType(str, Enum):
    APARTMENT = "Apartment"
    VILLA = "Villa"
    PLOT = "Plot"
    OFFICE = "Office"
    RETAIL = "Retail"

    @property
    def requires_bhk(self) -> bool:
        """Residential units must state a bedroom count."""
        return self in (PropertyType.APARTMENT, PropertyType.VILLA)


class Bhk(str, Enum):
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    STUDIO = "Studio"


class Purpose(str, Enum):
    BUY = "Buy"
    RENT = "Rent"


class Timeline(str, Enum):
    ZERO_TO_THREE_MONTHS = "0-3m"
    THREE_TO_SIX_MONTHS = "3-6m"
    MORE_THAN_SIX_MONTHS = ">6m"
    EXPLORING = "Exploring"


class Source(str, Enum):
    WEBSITE = "Website"
    REFERRAL = "Referral"
    WALK_IN = "Walk-in"
    CALL = "Call"
    OTHER = "Other"
    IMPORT = "Import"


class BuyerStatus(str, Enum):
    NEW = "New"
    QUALIFIED = "Qualified"
    CONTACTED = "Contacted"
    VISITED = "Visited"
    NEGOTIATION = "Negotiation"
    CONVERTED = "Converted"
    DROPPED = "Dropped"


@dataclass
class Buyer:
    """A buyer lead owned by the principal who created it.

    ``owner_id`` is nullable: when the owning user is removed and no other
    admin can take over, the record survives in an orphaned state.
    """

    full_name: str
    phone: str
    city: City
    property_type: PropertyType
    purpose: Purpose
    timeline: Timeline
    source: Source
    email: str | None = None
    bhk: Bhk | None = None
    budget_min: int | None = None
    budget_max: int | None = None
    status: BuyerStatus = BuyerStatus.NEW
    notes: str | None = None
    tags: list[str] = field(default_factory=list)
    owner_id: str | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def replace_fields(self, **values: Any) -> BuyerStatus:
        """Overwrite mutable fields (full replace) and refresh ``updated_at``.

        Returns the status held *before* the change so callers can diff it.
        """
        previous_status = self.status
        for name, value in values.items():
            if name in ("id", "owner_id", "created_at", "updated_at"):
                raise AttributeError(f"Buyer.{name} cannot be replaced")
            setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)
        return previous_status

    def snapshot(self) -> dict[str, Any]:
        """JSON-friendly view of the scalar fields, keyed by API field name."""
        return {
            "fullName": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "city": self.city.value,
            "propertyType": self.property_type.value,
            "bhk": self.bhk.value if self.bhk else None,
            "purpose": self.purpose.value,
            "budgetMin": self.budget_min,
            "budgetMax": self.budget_max,
            "timeline": self.timeline.value,
            "source": self.source.value,
            "status": self.status.value,
            "notes": self.notes,
            "tags": list(self.tags),
        }
