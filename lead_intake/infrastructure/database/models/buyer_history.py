"""SQLAlchemy ORM model for buyer history entries."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from lead_intake.infrastructure.database.base import Base


class BuyerHistoryModel(Base):
    """ORM model: maps to the append-only 'buyer_history' table."""

    __tablename__ = "buyer_history"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    buyer_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("buyers.id", ondelete="CASCADE"), nullable=False
    )
    changed_by: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    diff: Mapped[dict] = mapped_column(JSON, nullable=False)

    __table_args__ = (
        Index("ix_buyer_history_buyer", "buyer_id", "changed_at"),
    )
