from .buyer import (
    Bhk,
    Buyer,
    BuyerStatus,
    City,
    PropertyType,
    Purpose,
    Source,
    Timeline,
)
from .listing import BuyerFilter, BuyerPage
from .buyer_history import (
    BuyerChange,
    BuyerCreated,
    HistoryEntry,
    StatusChanged,
    change_from_diff,
)
from .user import Principal, User, UserRole

__all__ = [
    "Bhk",
    "Buyer",
    "BuyerStatus",
    "City",
    "PropertyType",
    "Purpose",
    "Source",
    "Timeline",
    "BuyerFilter",
    "BuyerPage",
    "BuyerChange",
    "BuyerCreated",
    "HistoryEntry",
    "StatusChanged",
    "change_from_diff",
    "Principal",
    "User",
    "UserRole",
]
