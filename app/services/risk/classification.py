"""
Reason-text classification for exceptions and notifications.

Each table is an ordered list of (predicate, category) pairs; the first
predicate that matches any reason wins. Matching is case-sensitive.
"""
from typing import Callable, Iterable, Sequence, TypeVar

from app.models.enums import ExceptionType, NotificationType

ReasonPredicate = Callable[[str], bool]
C = TypeVar("C")


def mentions(*needles: str) -> ReasonPredicate:
    """Predicate matching a reason that contains any of ``needles``."""
    def predicate(reason: str) -> bool:
        return any(needle in reason for needle in needles)
    return predicate


EXCEPTION_TYPE_RULES: tuple[tuple[ReasonPredicate, ExceptionType], ...] = (
    (mentions("Demurrage"), ExceptionType.DEMURRAGE_RISK),
    (mentions("Customs"), ExceptionType.CUSTOMS_ISSUE),
    (mentions("delayed", "ETA passed"), ExceptionType.DELAY),
    (mentions("hold"), ExceptionType.DOCUMENTATION_HOLD),
)

NOTIFICATION_TYPE_RULES: tuple[tuple[ReasonPredicate, NotificationType], ...] = (
    (mentions("Demurrage"), NotificationType.DEMURRAGE_ALERT),
    (mentions("Customs"), NotificationType.CUSTOMS_HOLD),
    (mentions("delayed", "ETA passed"), NotificationType.DELAY),
)


def classify(
    reasons: Iterable[str],
    rules: Sequence[tuple[ReasonPredicate, C]],
    default: C,
) -> C:
    """Return the category of the first rule matching any reason."""
    reasons = list(reasons)
    for predicate, category in rules:
        if any(predicate(reason) for reason in reasons):
            return category
    return default


def exception_type_for(reasons: Iterable[str]) -> ExceptionType:
    return classify(reasons, EXCEPTION_TYPE_RULES, ExceptionType.RISK_ESCALATION)


def notification_type_for(reasons: Iterable[str]) -> NotificationType:
    return classify(reasons, NOTIFICATION_TYPE_RULES, NotificationType.EXCEPTION)
