"""Abstract repository interface (port) for the append-only buyer history."""

from abc import ABC, abstractmethod

from lead_intake.domain.entities import HistoryEntry


class BuyerHistoryRepository(ABC):
    """Append-only store: entries are added and read, never changed or removed."""

    @abstractmethod
    async def append(self, entry: HistoryEntry) -> HistoryEntry:
        ...

    @abstractmethod
    async def list_for_buyer(self, buyer_id: str, limit: int = 10) -> list[HistoryEntry]:
        """Most recent entries for one buyer, newest first."""
        ...
