"""Domain value objects for filtered, paginated buyer listings."""

import math
from dataclasses import dataclass, field

from .buyer import Buyer, BuyerStatus, City, PropertyType


@dataclass(frozen=True)
class BuyerFilter:
    """Optional predicates applied to a buyer listing.

    ``search`` is a case-insensitive substring match on name, phone or email;
    the enum fields are exact matches.
    """

    search: str | None = None
    city: City | None = None
    status: BuyerStatus | None = None
    property_type: PropertyType | None = None


@dataclass
class BuyerPage:
    """One page of buyers plus the numbers needed to paginate."""

    items: list[Buyer] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total: int = 0

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0
