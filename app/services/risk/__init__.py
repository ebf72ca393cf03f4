"""
Container risk assessment package.

Rule-based scoring, transition orchestration and the SQLAlchemy stores the
orchestration writes through.
"""

from app.services.risk.data_model import (
    AssessmentRunSummary,
    ContainerRiskUpdate,
    ContainerSnapshot,
    RiskAssessment,
    RiskTransition,
    to_utc,
    whole_days,
)
from app.services.risk.scoring import (
    assess_container_risk,
    days_until_lfd,
)
from app.services.risk.classification import (
    EXCEPTION_TYPE_RULES,
    NOTIFICATION_TYPE_RULES,
    classify,
    exception_type_for,
    notification_type_for,
)
from app.services.risk.engine import RiskAssessmentService
from app.services.risk.stores import (
    ContainerStore,
    ExceptionStore,
    NotificationStore,
)

__all__ = [
    # Data model
    "AssessmentRunSummary",
    "ContainerRiskUpdate",
    "ContainerSnapshot",
    "RiskAssessment",
    "RiskTransition",
    "to_utc",
    "whole_days",
    # Scoring
    "assess_container_risk",
    "days_until_lfd",
    # Classification
    "EXCEPTION_TYPE_RULES",
    "NOTIFICATION_TYPE_RULES",
    "classify",
    "exception_type_for",
    "notification_type_for",
    # Orchestration
    "RiskAssessmentService",
    # Stores
    "ContainerStore",
    "ExceptionStore",
    "NotificationStore",
]
