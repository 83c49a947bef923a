"""Domain entities for the append-only buyer audit trail."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from .buyer import BuyerStatus


@dataclass(frozen=True)
class BuyerCreated:
    """A buyer record came into existence with the given field snapshot."""

    snapshot: dict[str, Any]

    action = "created"

    def to_diff(self) -> dict[str, Any]:
        return {"action": self.action, "changes": {}, "data": dict(self.snapshot)}


@dataclass(frozen=True)
class StatusChanged:
    """The buyer's pipeline status moved from one value to another.

    Status is the only field whose transitions are captured on update.
    """

    from_status: BuyerStatus
    to_status: BuyerStatus

    action = "updated"

    def to_diff(self) -> dict[str, Any]:
        return {
            "action": self.action,
            "changes": {
                "status": {"from": self.from_status.value, "to": self.to_status.value}
            },
        }


BuyerChange = BuyerCreated | StatusChanged


def change_from_diff(diff: dict[str, Any]) -> BuyerChange:
    """Rebuild the tagged change from a stored JSON payload."""
    action = diff.get("action")
    if action == BuyerCreated.action:
        return BuyerCreated(snapshot=dict(diff.get("data") or {}))
    if action == StatusChanged.action:
        status = (diff.get("changes") or {}).get("status") or {}
        return StatusChanged(
            from_status=BuyerStatus(status["from"]),
            to_status=BuyerStatus(status["to"]),
        )
    raise ValueError(f"Unknown history action: {action!r}")


@dataclass
class HistoryEntry:
    """One immutable audit row describing a change to a buyer."""

    buyer_id: str
    change: BuyerChange
    changed_by: str | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    changed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def diff(self) -> dict[str, Any]:
        return self.change.to_diff()
