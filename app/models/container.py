"""
Container model.

Holds the tracking-feed fields the risk engine reads and the two derived
fields it writes (risk_level, risk_reason).
"""
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, Text, Numeric
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel
from app.models.enums import ACTIVE_STATUSES, RiskLevel

if TYPE_CHECKING:
    from app.models.exception import ContainerException


class Container(BaseModel):
    """
    Ocean/rail container tracked by the dashboard.

    Date fields (eta, last_free_day) are kept as the strings received from
    the tracking feed; the risk engine parses them when scoring.

    Ownership:
    - risk_level / risk_reason: written only by the risk engine
    - everything else: written by the sync path or by user edits

    updated_at is the last external update and drives the staleness rules,
    so risk writes must leave it untouched.
    """
    __tablename__ = "containers"

    # =========================================================================
    # Identity
    # =========================================================================
    container_number: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
        index=True,
    )

    container_type: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default="40HC",
    )

    carrier: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    vessel_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    origin: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    destination: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # =========================================================================
    # Tracking State
    # =========================================================================
    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        index=True,
        comment="ContainerStatus value",
    )

    eta: Mapped[Optional[str]] = mapped_column(
        String(40),
        nullable=True,
        comment="Estimated arrival as received from the feed",
    )

    last_free_day: Mapped[Optional[str]] = mapped_column(
        String(40),
        nullable=True,
        comment="Last day at terminal before demurrage accrues",
    )

    hold_types: Mapped[list[str]] = mapped_column(
        ARRAY(String(50)),
        nullable=False,
        default=list,
        server_default="{}",
    )

    terminal_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # =========================================================================
    # Risk (engine-owned)
    # =========================================================================
    risk_level: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
        index=True,
        comment="RiskLevel value of the last assessment",
    )

    risk_reason: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # =========================================================================
    # Demurrage
    # =========================================================================
    demurrage_fee: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(12, 2),
        nullable=True,
        comment="Accrued demurrage (USD)",
    )

    daily_fee_rate: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2),
        nullable=True,
        default=Decimal("150.00"),
        comment="Demurrage charged per day past LFD (USD)",
    )

    # =========================================================================
    # Relationships
    # =========================================================================
    exceptions: Mapped[list["ContainerException"]] = relationship(
        "ContainerException",
        back_populates="container",
        cascade="all, delete-orphan",
        lazy="select",
    )

    # =========================================================================
    # Helper Methods
    # =========================================================================

    @property
    def is_active(self) -> bool:
        """Check if the bulk risk run should pick this container up."""
        return self.status in ACTIVE_STATUSES

    @property
    def risk_rank(self) -> int:
        """Numeric rank of the stored risk level (0 if never assessed)."""
        return RiskLevel.rank_of(self.risk_level)

    def __repr__(self) -> str:
        return (
            f"<Container(number={self.container_number!r}, "
            f"status={self.status}, risk={self.risk_level})>"
        )
