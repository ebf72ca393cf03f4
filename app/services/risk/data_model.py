"""
Data model for the risk assessment engine.

Converts Container ORM rows into plain snapshots so scoring never touches a
session, and defines the value objects the engine returns.
"""
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone, timedelta
from decimal import Decimal
from typing import Any, Optional, Union
from uuid import UUID

from dateutil import parser as date_parser

from app.models.enums import ACTIVE_STATUSES, NotificationPriority, RiskLevel

ONE_DAY = timedelta(days=1)
ONE_HOUR = timedelta(hours=1)


def to_utc(value: Union[datetime, str, None]) -> Optional[datetime]:
    """
    Normalize a feed timestamp to an aware UTC datetime.

    Strings are parsed leniently (ISO-8601, "2024-05-01", "2024-05-01 14:30").
    Naive values are taken to be UTC. Unparseable input yields None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = date_parser.parse(value)
        except (ValueError, OverflowError):
            return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def whole_days(delta: timedelta) -> int:
    """Floor a timedelta to whole days."""
    return delta // ONE_DAY


@dataclass
class ContainerSnapshot:
    """Read-only view of the container fields the engine scores."""
    id: UUID
    container_number: str
    status: str

    eta: Optional[str] = None
    last_free_day: Optional[str] = None
    hold_types: list[str] = field(default_factory=list)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Output of the previous assessment
    risk_level: Optional[str] = None
    risk_reason: Optional[str] = None

    # Demurrage
    daily_fee_rate: Optional[Decimal] = None
    demurrage_fee: Optional[Decimal] = None

    @property
    def is_active(self) -> bool:
        """Check if the bulk run should assess this container."""
        return self.status in ACTIVE_STATUSES

    @classmethod
    def from_model(cls, container: Any) -> "ContainerSnapshot":
        """Build a snapshot from a Container ORM instance."""
        return cls(
            id=container.id,
            container_number=container.container_number,
            status=container.status,
            eta=container.eta,
            last_free_day=container.last_free_day,
            hold_types=list(container.hold_types or []),
            created_at=container.created_at,
            updated_at=container.updated_at,
            risk_level=container.risk_level,
            risk_reason=container.risk_reason,
            daily_fee_rate=container.daily_fee_rate,
            demurrage_fee=container.demurrage_fee,
        )


@dataclass(frozen=True)
class RiskAssessment:
    """Result of scoring one container at one instant."""
    risk_level: RiskLevel
    risk_score: int
    risk_reasons: tuple[str, ...]
    should_create_exception: bool
    should_notify: bool
    notification_priority: NotificationPriority

    @property
    def risk_reason(self) -> str:
        """Reasons as persisted on the container."""
        return "; ".join(self.risk_reasons)

    @property
    def description(self) -> str:
        """Reasons as used in exception and notification bodies."""
        return ". ".join(self.risk_reasons)

    def to_dict(self) -> dict[str, Any]:
        return {
            "risk_level": self.risk_level.value,
            "risk_score": self.risk_score,
            "risk_reasons": list(self.risk_reasons),
            "should_create_exception": self.should_create_exception,
            "should_notify": self.should_notify,
            "notification_priority": self.notification_priority.value,
        }


@dataclass(frozen=True)
class RiskTransition:
    """Comparison of the stored level against a fresh assessment."""
    previous_level: Optional[str]
    new_level: RiskLevel

    @property
    def changed(self) -> bool:
        return self.previous_level != self.new_level.value

    @property
    def increased(self) -> bool:
        return self.new_level.rank > RiskLevel.rank_of(self.previous_level)

    @property
    def decreased(self) -> bool:
        return self.new_level.rank < RiskLevel.rank_of(self.previous_level)


@dataclass
class ContainerRiskUpdate:
    """What one orchestration call did for one container."""
    container_id: UUID
    container_number: str
    assessment: RiskAssessment
    transition: RiskTransition
    persisted: bool = False
    exception_created: bool = False
    notifications_created: int = 0
    notifications_dismissed: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "container_id": str(self.container_id),
            "container_number": self.container_number,
            "previous_level": self.transition.previous_level,
            "assessment": self.assessment.to_dict(),
            "persisted": self.persisted,
            "exception_created": self.exception_created,
            "notifications_created": self.notifications_created,
            "notifications_dismissed": self.notifications_dismissed,
        }


@dataclass
class AssessmentRunSummary:
    """Counters for one bulk assessment run."""
    assessed: int = 0
    updated: int = 0
    exceptions: int = 0
    notifications: int = 0
    dismissed: int = 0
    errors: int = 0
    failed_containers: list[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.updated or self.exceptions or self.notifications or self.dismissed)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
