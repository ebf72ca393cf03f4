"""
SQLAlchemy stores used by the risk engine and demurrage calculator.

Each store wraps a sync Session. Every write commits on its own so a failure
later in a container's side effects never undoes an earlier one; a failed
write rolls the session back so the next container can proceed.
"""
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Iterator, Optional
from uuid import UUID
import logging

from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session

from app.models import (
    ACTIVE_STATUSES,
    Container,
    ContainerException,
    EntityType,
    ExceptionCategory,
    Notification,
    RiskLevel,
    User,
)
from app.services.risk.data_model import ContainerSnapshot

logger = logging.getLogger(__name__)


class _SessionStore:
    """Shared commit/rollback handling."""

    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def _write(self) -> Iterator[Session]:
        try:
            yield self.session
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise


class ContainerStore(_SessionStore):
    """Container reads and engine-owned field writes."""

    def get_all_active_containers(self) -> list[ContainerSnapshot]:
        """Containers whose status is in the active set, oldest first."""
        result = self.session.execute(
            select(Container)
            .where(Container.status.in_(sorted(ACTIVE_STATUSES)))
            .order_by(Container.created_at)
        )
        return [ContainerSnapshot.from_model(c) for c in result.scalars().all()]

    def get_containers_with_lfd(self) -> list[ContainerSnapshot]:
        """Containers that have a Last Free Day set."""
        result = self.session.execute(
            select(Container)
            .where(Container.last_free_day.is_not(None))
            .order_by(Container.created_at)
        )
        return [ContainerSnapshot.from_model(c) for c in result.scalars().all()]

    def get_container(self, container_id: UUID) -> Optional[ContainerSnapshot]:
        result = self.session.execute(
            select(Container).where(Container.id == container_id)
        )
        container = result.scalar_one_or_none()
        return ContainerSnapshot.from_model(container) if container else None

    def update_container_risk(
        self,
        container_id: UUID,
        risk_level: str,
        risk_reason: str,
    ) -> None:
        """Write the derived risk fields, leaving updated_at untouched."""
        with self._write() as session:
            session.execute(
                update(Container)
                .where(Container.id == container_id)
                .values(
                    risk_level=risk_level,
                    risk_reason=risk_reason,
                    updated_at=Container.updated_at,
                )
            )

    def update_demurrage_fee(self, container_id: UUID, fee: Decimal) -> None:
        """Write the accrued demurrage, leaving updated_at untouched."""
        with self._write() as session:
            session.execute(
                update(Container)
                .where(Container.id == container_id)
                .values(
                    demurrage_fee=fee,
                    updated_at=Container.updated_at,
                )
            )


class ExceptionStore(_SessionStore):
    """Risk-alert exception writes."""

    def delete_risk_alert_exceptions(self, container_id: UUID) -> int:
        """Delete every risk-alert exception of a container."""
        with self._write() as session:
            result = session.execute(
                delete(ContainerException).where(
                    ContainerException.container_id == container_id,
                    ContainerException.category == ExceptionCategory.RISK_ALERT.value,
                )
            )
        return result.rowcount or 0

    def create_exception(
        self,
        container_id: UUID,
        type: str,
        title: str,
        description: str,
        timestamp: str,
        category: str = ExceptionCategory.RISK_ALERT.value,
    ) -> ContainerException:
        exception = ContainerException(
            container_id=container_id,
            category=category,
            type=type,
            title=title,
            description=description,
            timestamp=timestamp,
        )
        with self._write() as session:
            session.add(exception)
        return exception


class NotificationStore(_SessionStore):
    """User listing, notification fan-out and de-escalation dismissal."""

    def get_all_users(self) -> list[User]:
        result = self.session.execute(select(User).order_by(User.created_at.desc()))
        return list(result.scalars().all())

    def create_notification(
        self,
        user_id: Optional[UUID],
        type: str,
        priority: str,
        title: str,
        message: str,
        entity_type: Optional[str] = EntityType.CONTAINER.value,
        entity_id: Optional[UUID] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Notification:
        notification = Notification(
            user_id=user_id,
            type=type,
            priority=priority,
            title=title,
            message=message,
            entity_type=entity_type,
            entity_id=entity_id,
            meta=metadata,
            is_read=False,
        )
        with self._write() as session:
            session.add(notification)
        return notification

    def dismiss_risk_notifications_for_container(
        self,
        container_id: UUID,
        new_level: str,
    ) -> int:
        """
        Mark unread risk notifications above ``new_level`` as read.

        Only notifications whose metadata carries a riskLevel ranking higher
        than the new level are dismissed. Rows are kept for history.

        Returns:
            Number of notifications dismissed
        """
        threshold = RiskLevel.rank_of(new_level)
        now = datetime.now(timezone.utc)

        with self._write() as session:
            result = session.execute(
                select(Notification).where(
                    Notification.entity_type == EntityType.CONTAINER.value,
                    Notification.entity_id == container_id,
                    Notification.is_read.is_(False),
                )
            )
            dismissed = 0
            for notification in result.scalars().all():
                if notification.risk_rank > threshold:
                    notification.mark_read(now)
                    dismissed += 1

        if dismissed:
            logger.debug(f"Dismissed {dismissed} notifications for container {container_id}")
        return dismissed
