"""
Enum type definitions for the container risk tracker.

These enums map directly to the text values stored in PostgreSQL and
exchanged with the tracking feed.
"""
from enum import Enum
from typing import Optional


class ContainerStatus(str, Enum):
    """Container lifecycle status as reported by the tracking feed."""
    BOOKING_CONFIRMED = "booking-confirmed"
    GATE_IN = "gate-in"
    LOADED = "loaded"
    DEPARTED = "departed"
    IN_TRANSIT = "in-transit"
    ARRIVED = "arrived"
    UNLOADED = "unloaded"
    GATE_OUT = "gate-out"
    DELIVERED = "delivered"
    ON_RAIL = "on-rail"
    AT_TERMINAL = "at-terminal"
    CUSTOMS_CLEARANCE = "customs-clearance"
    DELAYED = "delayed"


# Statuses picked up by the bulk risk run. DELAYED is scorable but not
# part of the active set.
ACTIVE_STATUSES: frozenset[str] = frozenset({
    ContainerStatus.BOOKING_CONFIRMED.value,
    ContainerStatus.GATE_IN.value,
    ContainerStatus.LOADED.value,
    ContainerStatus.DEPARTED.value,
    ContainerStatus.IN_TRANSIT.value,
    ContainerStatus.ARRIVED.value,
    ContainerStatus.AT_TERMINAL.value,
    ContainerStatus.ON_RAIL.value,
    ContainerStatus.CUSTOMS_CLEARANCE.value,
})


class RiskLevel(str, Enum):
    """
    Risk bucket derived from the total risk score.

    Ranking (used for escalation checks):
    - CRITICAL: 4
    - HIGH: 3
    - MEDIUM: 2
    - LOW: 1
    - unset/unknown: 0
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Numeric rank of this level."""
        return {
            RiskLevel.LOW: 1,
            RiskLevel.MEDIUM: 2,
            RiskLevel.HIGH: 3,
            RiskLevel.CRITICAL: 4,
        }[self]

    @classmethod
    def rank_of(cls, level: Optional[str]) -> int:
        """Rank of a stored level value; None or unknown text ranks 0."""
        if level is None:
            return 0
        try:
            return cls(level).rank
        except ValueError:
            return 0

    @classmethod
    def from_score(cls, score: int) -> "RiskLevel":
        """Map a total risk score onto its bucket."""
        if score >= 7:
            return cls.CRITICAL
        if score >= 4:
            return cls.HIGH
        if score >= 2:
            return cls.MEDIUM
        return cls.LOW


class NotificationPriority(str, Enum):
    """Notification priority shown in the UI bell."""
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def from_score(cls, score: int) -> "NotificationPriority":
        """Map a total risk score onto a notification priority."""
        if score >= 7:
            return cls.URGENT
        if score >= 4:
            return cls.HIGH
        if score >= 2:
            return cls.NORMAL
        return cls.LOW


class ExceptionType(str, Enum):
    """Exception record types."""
    DEMURRAGE_RISK = "DEMURRAGE_RISK"
    CUSTOMS_ISSUE = "CUSTOMS_ISSUE"
    DELAY = "DELAY"
    DOCUMENTATION_HOLD = "DOCUMENTATION_HOLD"
    RISK_ESCALATION = "RISK_ESCALATION"


class ExceptionCategory(str, Enum):
    """
    Which flow owns an exception record.

    Only RISK_ALERT rows are created and deleted by the risk engine.
    """
    RISK_ALERT = "risk-alert"
    MANUAL = "manual"
    CARRIER = "carrier"


class NotificationType(str, Enum):
    """Notification types."""
    STATUS_CHANGE = "STATUS_CHANGE"
    EXCEPTION = "EXCEPTION"
    DEMURRAGE_ALERT = "DEMURRAGE_ALERT"
    CUSTOMS_HOLD = "CUSTOMS_HOLD"
    ARRIVAL = "ARRIVAL"
    DELAY = "DELAY"


class EntityType(str, Enum):
    """Entity a notification points at."""
    CONTAINER = "CONTAINER"
    SHIPMENT = "SHIPMENT"
