"""
Exception model.

Exceptions are operational problems raised against a container. The risk
engine owns the ``risk-alert`` category and keeps at most one live row of it
per container; other categories come from manual entry or carrier events.
"""
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import String, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.database import Base
from app.models.base import CreatedAtMixin, UUIDPrimaryKeyMixin
from app.models.enums import ExceptionCategory

if TYPE_CHECKING:
    from app.models.container import Container


class ContainerException(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    """
    Exception record attached to a container.

    Attributes:
        container_id: Affected container
        category: Owning flow (risk-alert, manual, carrier)
        type: ExceptionType value
        title: Short headline, e.g. "HIGH Risk Alert"
        description: Human-readable detail
        timestamp: ISO-8601 time the exception was raised
    """
    __tablename__ = "exceptions"

    container_id: Mapped[UUID] = mapped_column(
        ForeignKey("containers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    category: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ExceptionCategory.MANUAL.value,
        index=True,
    )

    type: Mapped[str] = mapped_column(String(40), nullable=False)

    title: Mapped[str] = mapped_column(Text, nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    timestamp: Mapped[str] = mapped_column(String(40), nullable=False)

    container: Mapped["Container"] = relationship(
        "Container",
        back_populates="exceptions",
    )

    @property
    def is_risk_alert(self) -> bool:
        """Check if this row is owned by the risk engine."""
        return self.category == ExceptionCategory.RISK_ALERT.value

    def __repr__(self) -> str:
        return (
            f"<ContainerException(container={self.container_id}, "
            f"type={self.type}, category={self.category})>"
        )
