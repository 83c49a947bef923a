"""Application service (use case) for buyer record operations."""

import logging
from dataclasses import dataclass, field

from lead_intake.application.interfaces import BuyerRepository
from lead_intake.application.schemas.buyer import BuyerCreate, BuyerUpdate
from lead_intake.application.services.history_recorder import HistoryRecorder
from lead_intake.domain import access_policy
from lead_intake.domain.entities import (
    Buyer,
    BuyerFilter,
    BuyerPage,
    BuyerStatus,
    HistoryEntry,
    Principal,
)
from lead_intake.domain.exceptions import EntityNotFoundError, ForbiddenError

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("lead_intake.access")


@dataclass
class BuyerDetail:
    """A buyer together with its most recent history."""

    buyer: Buyer
    history: list[HistoryEntry] = field(default_factory=list)


class BuyerService:
    """Orchestrates buyer CRUD under the ownership access policy.

    Every mutating call takes the request's principal explicitly and checks
    the policy before touching storage; history is recorded afterwards on a
    best-effort basis.
    """

    def __init__(
        self,
        repository: BuyerRepository,
        history: HistoryRecorder,
        history_limit: int = 10,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ):
        self._repository = repository
        self._history = history
        self._history_limit = history_limit
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    async def get_buyer(self, buyer_id: str) -> Buyer:
        buyer = await self._repository.get_by_id(buyer_id)
        if buyer is None:
            raise EntityNotFoundError("Buyer", buyer_id)
        return buyer

    async def get_buyer_detail(self, buyer_id: str) -> BuyerDetail:
        buyer = await self.get_buyer(buyer_id)
        try:
            history = await self._history.list_for(buyer_id, limit=self._history_limit)
        except Exception as exc:
            logger.warning("Failed to fetch history for buyer %s: %s", buyer_id, exc)
            history = []
        return BuyerDetail(buyer=buyer, history=history)

    async def list_buyers(
        self,
        principal: Principal,
        filters: BuyerFilter | None = None,
        *,
        page: int = 1,
        limit: int | None = None,
    ) -> BuyerPage:
        page = max(page, 1)
        limit = min(max(limit or self._default_page_size, 1), self._max_page_size)
        items, total = await self._repository.get_page(
            filters or BuyerFilter(),
            owner_id=access_policy.list_scope_owner_id(principal),
            skip=(page - 1) * limit,
            limit=limit,
        )
        return BuyerPage(items=items, page=page, limit=limit, total=total)

    async def create_buyer(self, data: BuyerCreate, principal: Principal) -> Buyer:
        buyer = Buyer(**data.to_fields(), owner_id=principal.id, status=BuyerStatus.NEW)
        buyer.updated_at = buyer.created_at
        created = await self._repository.create(buyer)
        logger.info("Buyer %s created by %s", created.id, principal.id)
        await self._history.record_created(created, principal.id)
        return created

    async def update_buyer(
        self, buyer_id: str, data: BuyerUpdate, principal: Principal
    ) -> Buyer:
        buyer = await self.get_buyer(buyer_id)
        self._authorize(access_policy.authorize_write, principal, buyer)

        previous_status = buyer.replace_fields(**data.to_fields())
        updated = await self._repository.update(buyer)
        await self._history.record_status_change(
            updated.id, principal.id, previous_status, updated.status
        )
        return updated

    async def delete_buyer(self, buyer_id: str, principal: Principal) -> Buyer:
        buyer = await self.get_buyer(buyer_id)
        self._authorize(access_policy.authorize_delete, principal, buyer)

        deleted = await self._repository.delete(buyer_id)
        if deleted is None:
            raise EntityNotFoundError("Buyer", buyer_id)
        logger.info("Buyer %s deleted by %s", buyer_id, principal.id)
        return deleted

    @staticmethod
    def _authorize(check, principal: Principal, buyer: Buyer) -> None:
        try:
            check(principal, buyer)
        except ForbiddenError:
            access_logger.info(
                "Denied %s on buyer %s for principal %s (owner=%s)",
                check.__name__,
                buyer.id,
                principal.id,
                buyer.owner_id,
            )
            raise
