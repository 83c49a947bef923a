"""Best-effort writer for the buyer audit trail."""

import logging

from lead_intake.application.interfaces import BuyerHistoryRepository
from lead_intake.domain.entities import (
    Buyer,
    BuyerChange,
    BuyerCreated,
    BuyerStatus,
    HistoryEntry,
    StatusChanged,
)

logger = logging.getLogger(__name__)


class HistoryRecorder:
    """Appends history entries without ever failing the parent mutation.

    History is an auxiliary guarantee: a write failure is logged and the
    caller carries on with ``None`` instead of an entry.
    """

    def __init__(self, repository: BuyerHistoryRepository):
        self._repository = repository

    async def record(
        self, buyer_id: str, principal_id: str | None, change: BuyerChange
    ) -> HistoryEntry | None:
        entry = HistoryEntry(buyer_id=buyer_id, change=change, changed_by=principal_id)
        try:
            return await self._repository.append(entry)
        except Exception as exc:
            logger.warning(
                "Failed to log %s history for buyer %s: %s", change.action, buyer_id, exc
            )
            return None

    async def record_created(self, buyer: Buyer, principal_id: str | None) -> HistoryEntry | None:
        return await self.record(buyer.id, principal_id, BuyerCreated(snapshot=buyer.snapshot()))

    async def record_status_change(
        self,
        buyer_id: str,
        principal_id: str | None,
        from_status: BuyerStatus,
        to_status: BuyerStatus,
    ) -> HistoryEntry | None:
        """Record a status transition; a no-op when the status did not move."""
        if from_status == to_status:
            return None
        return await self.record(
            buyer_id, principal_id, StatusChanged(from_status=from_status, to_status=to_status)
        )

    async def list_for(self, buyer_id: str, limit: int = 10) -> list[HistoryEntry]:
        return await self._repository.list_for_buyer(buyer_id, limit=limit)
