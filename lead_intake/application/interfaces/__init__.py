from .buyer_repository import BuyerRepository
from .buyer_history_repository import BuyerHistoryRepository
from .user_repository import UserRepository
from .unit_of_work import BuyerUnitOfWork, BuyerWriteScope

__all__ = [
    "BuyerRepository",
    "BuyerHistoryRepository",
    "UserRepository",
    "BuyerUnitOfWork",
    "BuyerWriteScope",
]
