"""
Demurrage accrual.

For every container past its Last Free Day the accrued fee is recomputed as
days overdue times the container's daily rate and written back. Users are
alerted every few overdue days while the fee keeps changing.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Optional
from uuid import UUID
import logging

from app.core.config import settings
from app.models.enums import EntityType, NotificationPriority, NotificationType
from app.services.risk.data_model import ContainerSnapshot, to_utc

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DemurrageResult:
    """Accrued demurrage for one overdue container."""
    container_id: UUID
    container_number: str
    days_overdue: int
    calculated_fee: Decimal
    last_free_day: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "container_id": str(self.container_id),
            "container_number": self.container_number,
            "days_overdue": self.days_overdue,
            "calculated_fee": float(self.calculated_fee),
            "last_free_day": self.last_free_day,
        }


@dataclass
class DemurrageRunSummary:
    """Counters for one demurrage run."""
    updated: int = 0
    notifications: int = 0
    results: list[DemurrageResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "updated": self.updated,
            "notifications": self.notifications,
            "results": [r.to_dict() for r in self.results],
        }


def days_overdue(last_free_day: Optional[str], now: datetime) -> Optional[int]:
    """
    Whole calendar days since the LFD, or None when not yet overdue.

    Unparseable LFD values are treated as not overdue.
    """
    lfd = to_utc(last_free_day)
    if lfd is None:
        return None
    days = (to_utc(now).date() - lfd.date()).days
    return days if days > 0 else None


def alert_priority(overdue: int) -> NotificationPriority:
    if overdue > 7:
        return NotificationPriority.URGENT
    if overdue > 3:
        return NotificationPriority.HIGH
    return NotificationPriority.NORMAL


class DemurrageCalculator:
    """
    Recomputes demurrage fees through the container and notification stores.

    Args:
        containers: get_containers_with_lfd(), update_demurrage_fee(id, fee)
        notifications: get_all_users(), create_notification(...)
        default_daily_rate: Rate used when a container has none set
        alert_every_days: Alert when days overdue is a multiple of this
        clock: Returns the evaluation instant (UTC)
    """

    def __init__(
        self,
        containers,
        notifications,
        default_daily_rate: Decimal = settings.default_daily_demurrage_rate,
        alert_every_days: int = settings.demurrage_alert_every_days,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.containers = containers
        self.notifications = notifications
        self.default_daily_rate = Decimal(default_daily_rate)
        self.alert_every_days = alert_every_days
        self.clock = clock

    def calculate_fee(self, container: ContainerSnapshot, overdue: int) -> Decimal:
        rate = container.daily_fee_rate
        if rate is None:
            rate = self.default_daily_rate
        return (Decimal(overdue) * Decimal(rate)).quantize(CENT, rounding=ROUND_HALF_UP)

    def calculate_all_demurrage(self, now: Optional[datetime] = None) -> DemurrageRunSummary:
        """Recompute the fee of every overdue container and raise due alerts."""
        now = now or self.clock()
        summary = DemurrageRunSummary()

        for container in self.containers.get_containers_with_lfd():
            overdue = days_overdue(container.last_free_day, now)
            if overdue is None:
                continue

            fee = self.calculate_fee(container, overdue)
            previous_fee = Decimal(container.demurrage_fee or 0)
            fee_changed = abs(fee - previous_fee) > CENT

            self.containers.update_demurrage_fee(container.id, fee)
            summary.updated += 1
            summary.results.append(
                DemurrageResult(
                    container_id=container.id,
                    container_number=container.container_number,
                    days_overdue=overdue,
                    calculated_fee=fee,
                    last_free_day=container.last_free_day,
                )
            )

            if fee_changed and overdue % self.alert_every_days == 0:
                summary.notifications += self._send_alert(container, overdue, fee)

        if summary.updated or summary.notifications:
            logger.info(
                f"Demurrage: updated={summary.updated}, notifications={summary.notifications}"
            )
        return summary

    def calculate_single_container(
        self,
        container: ContainerSnapshot,
        now: Optional[datetime] = None,
    ) -> Optional[DemurrageResult]:
        """
        Recompute one container's fee without alerting.

        Returns None when the container is not past its LFD.
        """
        overdue = days_overdue(container.last_free_day, now or self.clock())
        if overdue is None:
            return None

        fee = self.calculate_fee(container, overdue)
        self.containers.update_demurrage_fee(container.id, fee)
        return DemurrageResult(
            container_id=container.id,
            container_number=container.container_number,
            days_overdue=overdue,
            calculated_fee=fee,
            last_free_day=container.last_free_day,
        )

    def _send_alert(self, container: ContainerSnapshot, overdue: int, fee: Decimal) -> int:
        number = container.container_number
        sent = 0
        for user in self.notifications.get_all_users():
            self.notifications.create_notification(
                user_id=user.id,
                type=NotificationType.DEMURRAGE_ALERT.value,
                priority=alert_priority(overdue).value,
                title=f"Demurrage Accruing: {number}",
                message=(
                    f"Container {number} is {overdue} days past Last Free Day. "
                    f"Estimated demurrage: ${fee:.2f}"
                ),
                entity_type=EntityType.CONTAINER.value,
                entity_id=container.id,
                metadata={
                    "containerNumber": number,
                    "daysOverdue": overdue,
                    "demurrageFee": float(fee),
                },
            )
            sent += 1
        return sent
