"""Port for opening independent write transactions (one per imported row)."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from .buyer_history_repository import BuyerHistoryRepository
from .buyer_repository import BuyerRepository


@dataclass
class BuyerWriteScope:
    """Repositories bound to a single transaction."""

    buyers: BuyerRepository
    history: BuyerHistoryRepository


class BuyerUnitOfWork(ABC):
    """Hands out short-lived transactional scopes.

    The scope commits when the ``async with`` block exits cleanly and rolls
    back when it raises; earlier scopes are unaffected either way.
    """

    @abstractmethod
    def begin(self) -> AbstractAsyncContextManager[BuyerWriteScope]:
        ...
