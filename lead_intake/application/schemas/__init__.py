from .buyer import (
    BuyerCreate,
    BuyerDeleteResponse,
    BuyerDetailResponse,
    BuyerImportRow,
    BuyerListResponse,
    BuyerResponse,
    BuyerUpdate,
    HistoryEntryResponse,
    ImportResponse,
    ImportResultsResponse,
    PaginationResponse,
)
from .user import (
    UserCreate,
    UserDeleteResponse,
    UserListResponse,
    UserResponse,
    UserUpdate,
    UserUpdateResponse,
)
from .validation import field_errors, parse_model

__all__ = [
    "BuyerCreate",
    "BuyerDeleteResponse",
    "BuyerDetailResponse",
    "BuyerImportRow",
    "BuyerListResponse",
    "BuyerResponse",
    "BuyerUpdate",
    "HistoryEntryResponse",
    "ImportResponse",
    "ImportResultsResponse",
    "PaginationResponse",
    "UserCreate",
    "UserDeleteResponse",
    "UserListResponse",
    "UserResponse",
    "UserUpdate",
    "UserUpdateResponse",
    "field_errors",
    "parse_model",
]
