"""
Rule-based container risk scoring.

Each rule adds points and a reason. Rules are evaluated in a fixed order,
which only affects the order of reasons, never the total.

Point table:
- ETA passed, not yet arrived: +3
- LFD passed (demurrage accruing): +4
- LFD today: +3
- LFD within 2 days: +2
- In customs clearance: +2
- Active holds: +2
- No tracking update for 48h while moving: +1
- Marked delayed: +2
- Planned transit longer than 30 days: +1
- Arrived 3+ days ago, not gated out: +2

Thresholds:
- Level: >=7 critical, >=4 high, >=2 medium, else low
- Exception: score >= 2
- Notification: score >= 3
"""
from datetime import datetime, timezone
from typing import Optional

from app.models.enums import ContainerStatus, NotificationPriority, RiskLevel
from app.services.risk.data_model import (
    ONE_HOUR,
    ContainerSnapshot,
    RiskAssessment,
    to_utc,
    whole_days,
)

# Statuses after which an ETA can no longer be "missed"
ARRIVED_STATUSES = frozenset({
    ContainerStatus.ARRIVED.value,
    ContainerStatus.UNLOADED.value,
    ContainerStatus.GATE_OUT.value,
    ContainerStatus.DELIVERED.value,
})

# Statuses expected to produce regular tracking events
MOVING_STATUSES = frozenset({
    ContainerStatus.IN_TRANSIT.value,
    ContainerStatus.DEPARTED.value,
    ContainerStatus.LOADED.value,
})

STALE_TRACKING_HOURS = 48
LONG_TRANSIT_DAYS = 30
GATE_OUT_GRACE_DAYS = 3
LFD_WARNING_DAYS = 2

EXCEPTION_SCORE_THRESHOLD = 2
NOTIFY_SCORE_THRESHOLD = 3


def days_until_lfd(last_free_day: Optional[str], now: datetime) -> Optional[int]:
    """
    Calendar days from today until the LFD (negative once it has passed).

    Time-of-day is dropped on both sides.
    """
    lfd = to_utc(last_free_day)
    if lfd is None:
        return None
    return (lfd.date() - to_utc(now).date()).days


def assess_container_risk(
    container: ContainerSnapshot,
    now: Optional[datetime] = None,
) -> RiskAssessment:
    """
    Score a container snapshot.

    Pure: the same snapshot and ``now`` always give the same assessment.

    Args:
        container: Snapshot of the container
        now: Evaluation instant (defaults to current UTC time)

    Returns:
        RiskAssessment with level, score, reasons and derived flags
    """
    now = to_utc(now) if now is not None else datetime.now(timezone.utc)
    score = 0
    reasons: list[str] = []

    status = container.status
    eta = to_utc(container.eta)
    created_at = to_utc(container.created_at)
    updated_at = to_utc(container.updated_at)

    # ETA passed but container not arrived
    if eta is not None and status not in ARRIVED_STATUSES and now > eta:
        score += 3
        reasons.append(f"ETA passed {whole_days(now - eta)} day(s) ago - container delayed")

    # Last Free Day passed / today / imminent
    lfd_days = days_until_lfd(container.last_free_day, now)
    if lfd_days is not None:
        if lfd_days < 0:
            score += 4
            reasons.append(f"Demurrage accruing - {abs(lfd_days)} day(s) past LFD")
        elif lfd_days == 0:
            score += 3
            reasons.append("LFD is TODAY - immediate action required")
        elif lfd_days <= LFD_WARNING_DAYS:
            score += 2
            reasons.append(f"LFD in {lfd_days} day(s)")

    if status == ContainerStatus.CUSTOMS_CLEARANCE.value:
        score += 2
        reasons.append("In customs clearance")

    if container.hold_types:
        score += 2
        reasons.append(f"Active holds: {', '.join(container.hold_types)}")

    # Stale tracking while moving
    if status in MOVING_STATUSES and updated_at is not None:
        if (now - updated_at) / ONE_HOUR > STALE_TRACKING_HOURS:
            score += 1
            reasons.append("No tracking updates for 48+ hours")

    if status == ContainerStatus.DELAYED.value:
        score += 2
        reasons.append("Container marked as delayed")

    # Long planned transit (created_at stands in for the booking date)
    if eta is not None and created_at is not None:
        transit_days = whole_days(eta - created_at)
        if transit_days > LONG_TRANSIT_DAYS:
            score += 1
            reasons.append(f"Long planned transit: {transit_days} days")

    # Arrived but still not gated out
    if status == ContainerStatus.ARRIVED.value and updated_at is not None:
        days_since_arrival = whole_days(now - updated_at)
        if days_since_arrival >= GATE_OUT_GRACE_DAYS:
            score += 2
            reasons.append(f"Arrived {days_since_arrival} days ago, not gated out")

    return RiskAssessment(
        risk_level=RiskLevel.from_score(score),
        risk_score=score,
        risk_reasons=tuple(reasons),
        should_create_exception=score >= EXCEPTION_SCORE_THRESHOLD,
        should_notify=score >= NOTIFY_SCORE_THRESHOLD,
        notification_priority=NotificationPriority.from_score(score),
    )
