from .buyer_repository import SQLAlchemyBuyerRepository
from .buyer_history_repository import SQLAlchemyBuyerHistoryRepository
from .user_repository import SQLAlchemyUserRepository

__all__ = [
    "SQLAlchemyBuyerRepository",
    "SQLAlchemyBuyerHistoryRepository",
    "SQLAlchemyUserRepository",
]
