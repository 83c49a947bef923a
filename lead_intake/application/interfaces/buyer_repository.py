"""Abstract repository interface (port) for Buyer persistence."""

from abc import ABC, abstractmethod

from lead_intake.domain.entities import Buyer, BuyerFilter


class BuyerRepository(ABC):
    """Port for buyer persistence: implemented in the infrastructure layer.

    Implementations raise ``StoreUnavailableError`` on persistence failures.
    """

    @abstractmethod
    async def get_by_id(self, buyer_id: str) -> Buyer | None:
        """Retrieve a single buyer by its UUID."""
        ...

    @abstractmethod
    async def get_page(
        self,
        filters: BuyerFilter,
        *,
        owner_id: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[Buyer], int]:
        """Return one page of matching buyers (newest update first) and the total count.

        ``owner_id`` restricts the result to that owner's records when set.
        """
        ...

    @abstractmethod
    async def get_all(self, *, owner_id: str | None = None) -> list[Buyer]:
        """Every buyer (optionally for one owner), newest update first."""
        ...

    @abstractmethod
    async def create(self, buyer: Buyer) -> Buyer:
        """Persist a new buyer and return it."""
        ...

    @abstractmethod
    async def update(self, buyer: Buyer) -> Buyer:
        """Write all mutable fields of an existing buyer."""
        ...

    @abstractmethod
    async def delete(self, buyer_id: str) -> Buyer | None:
        """Hard-delete a buyer. Returns the deleted record, or None if absent."""
        ...

    @abstractmethod
    async def reassign_owner(self, from_owner_id: str, to_owner_id: str | None) -> int:
        """Move every record owned by ``from_owner_id``; None orphans them."""
        ...

    @abstractmethod
    async def count_owned_by(self, owner_id: str) -> int:
        ...
