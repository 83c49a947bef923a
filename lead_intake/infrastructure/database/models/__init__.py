from .user import UserModel
from .buyer import BuyerModel
from .buyer_history import BuyerHistoryModel

__all__ = [
    "UserModel",
    "BuyerModel",
    "BuyerHistoryModel",
]
