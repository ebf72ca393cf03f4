"""
Notification model.

One row per (user, event). Risk escalations fan out one row to every user.
"""
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional, Any
from uuid import UUID

from sqlalchemy import String, Text, Boolean, ForeignKey, DateTime
from sqlalchemy.dialects.postgresql import JSONB, UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.database import Base
from app.models.base import CreatedAtMixin, UUIDPrimaryKeyMixin
from app.models.enums import EntityType, NotificationPriority, RiskLevel

if TYPE_CHECKING:
    from app.models.user import User


class Notification(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """
    Per-user alert shown in the notification bell.

    Types:
    - DEMURRAGE_ALERT: Demurrage accruing or imminent
    - CUSTOMS_HOLD: Customs clearance or customs hold
    - DELAY: ETA passed or container delayed
    - EXCEPTION: Any other risk escalation
    - STATUS_CHANGE / ARRIVAL: Raised by the sync path
    """
    __tablename__ = "notifications"

    user_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    type: Mapped[str] = mapped_column(String(30), nullable=False)

    priority: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=NotificationPriority.NORMAL.value,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    message: Mapped[str] = mapped_column(Text, nullable=False)

    entity_type: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        default=EntityType.CONTAINER.value,
    )

    entity_id: Mapped[Optional[UUID]] = mapped_column(
        PG_UUID(as_uuid=True),
        nullable=True,
        index=True,
    )

    # "metadata" is reserved on declarative classes
    meta: Mapped[Optional[dict[str, Any]]] = mapped_column(
        "metadata",
        JSONB,
        nullable=True,
        comment="Container number, risk level, score, reasons",
    )

    is_read: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
    )

    read_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    user: Mapped[Optional["User"]] = relationship("User")

    @property
    def risk_rank(self) -> int:
        """Rank of the risk level recorded in metadata (0 if none)."""
        return RiskLevel.rank_of((self.meta or {}).get("riskLevel"))

    def mark_read(self, when: Optional[datetime] = None) -> None:
        """Mark notification as read."""
        self.is_read = True
        self.read_at = when or datetime.now(timezone.utc)

    def __repr__(self) -> str:
        return (
            f"<Notification(user={self.user_id}, type={self.type}, "
            f"priority={self.priority}, read={self.is_read})>"
        )
