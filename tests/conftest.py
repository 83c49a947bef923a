"""Shared fixtures: in-memory fakes for the repository and unit-of-work ports."""

import os

# Keep the module-level engine off PostgreSQL during tests.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from contextlib import asynccontextmanager  # noqa: E402

import pytest  # noqa: E402

from lead_intake.application.interfaces import (  # noqa: E402
    BuyerHistoryRepository,
    BuyerRepository,
    BuyerUnitOfWork,
    BuyerWriteScope,
    UserRepository,
)
from lead_intake.domain.entities import (  # noqa: E402
    Buyer,
    BuyerFilter,
    HistoryEntry,
    Principal,
    User,
    UserRole,
)
from lead_intake.domain.exceptions import StoreUnavailableError  # noqa: E402


class FakeBuyerRepository(BuyerRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self):
        self._buyers: dict[str, Buyer] = {}
        self.fail_for_phones: set[str] = set()

    def _matches(self, buyer: Buyer, filters: BuyerFilter, owner_id: str | None) -> bool:
        if owner_id is not None and buyer.owner_id != owner_id:
            return False
        if filters.search:
            needle = filters.search.lower()
            haystack = [buyer.full_name, buyer.phone, buyer.email or ""]
            if not any(needle in value.lower() for value in haystack):
                return False
        if filters.city is not None and buyer.city != filters.city:
            return False
        if filters.status is not None and buyer.status != filters.status:
            return False
        if filters.property_type is not None and buyer.property_type != filters.property_type:
            return False
        return True

    def _newest_first(self, buyers: list[Buyer]) -> list[Buyer]:
        return sorted(buyers, key=lambda b: b.updated_at, reverse=True)

    async def get_by_id(self, buyer_id: str) -> Buyer | None:
        return self._buyers.get(buyer_id)

    async def get_page(self, filters, *, owner_id=None, skip=0, limit=10):
        matched = self._newest_first(
            [b for b in self._buyers.values() if self._matches(b, filters, owner_id)]
        )
        return matched[skip : skip + limit], len(matched)

    async def get_all(self, *, owner_id=None) -> list[Buyer]:
        return self._newest_first(
            [b for b in self._buyers.values() if owner_id is None or b.owner_id == owner_id]
        )

    async def create(self, buyer: Buyer) -> Buyer:
        if buyer.phone in self.fail_for_phones:
            raise StoreUnavailableError("buyer create", RuntimeError("disk full"))
        self._buyers[buyer.id] = buyer
        return buyer

    async def update(self, buyer: Buyer) -> Buyer:
        if buyer.id not in self._buyers:
            raise ValueError(f"Buyer {buyer.id} not found")
        self._buyers[buyer.id] = buyer
        return buyer

    async def delete(self, buyer_id: str) -> Buyer | None:
        return self._buyers.pop(buyer_id, None)

    async def reassign_owner(self, from_owner_id: str, to_owner_id: str | None) -> int:
        moved = 0
        for buyer in self._buyers.values():
            if buyer.owner_id == from_owner_id:
                buyer.owner_id = to_owner_id
                moved += 1
        return moved

    async def count_owned_by(self, owner_id: str) -> int:
        return sum(1 for b in self._buyers.values() if b.owner_id == owner_id)


class FakeHistoryRepository(BuyerHistoryRepository):
    """Append-only list; ``fail`` makes every append raise a store error."""

    def __init__(self):
        self.entries: list[HistoryEntry] = []
        self.fail = False

    async def append(self, entry: HistoryEntry) -> HistoryEntry:
        if self.fail:
            raise StoreUnavailableError("history append", RuntimeError("db down"))
        self.entries.append(entry)
        return entry

    async def list_for_buyer(self, buyer_id: str, limit: int = 10) -> list[HistoryEntry]:
        matching = [e for e in self.entries if e.buyer_id == buyer_id]
        return sorted(reversed(matching), key=lambda e: e.changed_at, reverse=True)[:limit]


class FakeUserRepository(UserRepository):
    def __init__(self):
        self._users: dict[str, User] = {}

    async def get_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email.lower()), None)

    async def get_all(self) -> list[User]:
        return sorted(self._users.values(), key=lambda u: u.created_at)

    async def find_active_admin(self, *, exclude_id=None) -> User | None:
        for user in await self.get_all():
            if user.role is UserRole.ADMIN and user.is_active and user.id != exclude_id:
                return user
        return None

    async def create(self, user: User) -> User:
        self._users[user.id] = user
        return user

    async def update(self, user: User) -> User:
        self._users[user.id] = user
        return user

    async def delete(self, user_id: str) -> bool:
        return self._users.pop(user_id, None) is not None


class FakeUnitOfWork(BuyerUnitOfWork):
    """Every scope writes straight through to the shared fakes."""

    def __init__(self, buyers: FakeBuyerRepository, history: FakeHistoryRepository):
        self._scope = BuyerWriteScope(buyers=buyers, history=history)
        self.scopes_opened = 0

    @asynccontextmanager
    async def begin(self):
        self.scopes_opened += 1
        yield self._scope


@pytest.fixture
def buyer_repo() -> FakeBuyerRepository:
    return FakeBuyerRepository()


@pytest.fixture
def history_repo() -> FakeHistoryRepository:
    return FakeHistoryRepository()


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def unit_of_work(buyer_repo, history_repo) -> FakeUnitOfWork:
    return FakeUnitOfWork(buyer_repo, history_repo)


@pytest.fixture
def alice() -> Principal:
    return Principal(id="user-alice-0001", email="alice@example.com")


@pytest.fixture
def bob() -> Principal:
    return Principal(id="user-bob-00002", email="bob@example.com")


@pytest.fixture
def admin() -> Principal:
    return Principal(id="user-admin-003", email="admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
def buyer_payload() -> dict:
    """A valid create/update body in the API's camelCase spelling."""
    return {
        "fullName": "Ravi Kumar",
        "email": "ravi@example.com",
        "phone": "9876543210",
        "city": "Mohali",
        "propertyType": "Apartment",
        "bhk": "2",
        "purpose": "Buy",
        "budgetMin": 5000000,
        "budgetMax": 7500000,
        "timeline": "0-3m",
        "source": "Referral",
        "notes": "Prefers east facing",
        "tags": ["hot", "nri"],
    }
