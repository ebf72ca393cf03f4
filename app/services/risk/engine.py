"""
Risk assessment orchestration.

Compares the stored risk level of a container with a fresh assessment and
fires the side effects for the transition:

1. Persist risk_level / risk_reason
2. Replace the risk-alert exception (significant and changed)
3. Notify every user (escalation above the notify threshold)
4. Dismiss stale notifications (de-escalation)

The service is stateless; the only memory of the previous level is the
value stored on the container.
"""
from datetime import datetime, timezone
from typing import Callable, Optional
import logging

from app.models.enums import EntityType
from app.services.risk.classification import exception_type_for, notification_type_for
from app.services.risk.data_model import (
    AssessmentRunSummary,
    ContainerRiskUpdate,
    ContainerSnapshot,
    RiskAssessment,
    RiskTransition,
)
from app.services.risk.scoring import assess_container_risk

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RiskAssessmentService:
    """
    Applies risk assessments to containers through three stores.

    Args:
        containers: get_all_active_containers(), update_container_risk(id, level, reason)
        exceptions: delete_risk_alert_exceptions(id), create_exception(...)
        notifications: get_all_users(), create_notification(...),
            dismiss_risk_notifications_for_container(id, level)
        clock: Returns the evaluation instant (UTC)
    """

    def __init__(
        self,
        containers,
        exceptions,
        notifications,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.containers = containers
        self.exceptions = exceptions
        self.notifications = notifications
        self.clock = clock

    def assess(
        self,
        container: ContainerSnapshot,
        now: Optional[datetime] = None,
    ) -> RiskAssessment:
        """Score a container without side effects."""
        return assess_container_risk(container, now or self.clock())

    # =========================================================================
    # Single container
    # =========================================================================

    def update_container_risk(
        self,
        container: ContainerSnapshot,
        now: Optional[datetime] = None,
    ) -> ContainerRiskUpdate:
        """
        Assess one container and apply every side effect of the transition.

        The risk fields are always written, even when unchanged. Store errors
        propagate; earlier side effects are not rolled back.
        """
        now = now or self.clock()
        assessment = assess_container_risk(container, now)
        update = ContainerRiskUpdate(
            container_id=container.id,
            container_number=container.container_number,
            assessment=assessment,
            transition=RiskTransition(container.risk_level, assessment.risk_level),
        )
        self._persist(update)
        self._apply_side_effects(container, update, now)
        return update

    # =========================================================================
    # Bulk
    # =========================================================================

    def assess_all_containers(self, now: Optional[datetime] = None) -> AssessmentRunSummary:
        """
        Assess every active container.

        A container is written only when its level changed or its score is
        non-zero. A failure on one container is logged and the run moves on.
        """
        now = now or self.clock()
        summary = AssessmentRunSummary()

        for container in self.containers.get_all_active_containers():
            summary.assessed += 1
            try:
                assessment = assess_container_risk(container, now)
                update = ContainerRiskUpdate(
                    container_id=container.id,
                    container_number=container.container_number,
                    assessment=assessment,
                    transition=RiskTransition(container.risk_level, assessment.risk_level),
                )
                if not (update.transition.changed or assessment.risk_score > 0):
                    continue

                self._persist(update)
                summary.updated += 1

                self._apply_side_effects(container, update, now)
                summary.exceptions += int(update.exception_created)
                summary.notifications += update.notifications_created
                summary.dismissed += update.notifications_dismissed
            except Exception as e:
                summary.errors += 1
                summary.failed_containers.append(container.container_number)
                logger.error(f"Error assessing container {container.container_number}: {e}")

        if summary.has_changes or summary.errors:
            logger.info(
                f"Risk assessment: assessed={summary.assessed}, updated={summary.updated}, "
                f"exceptions={summary.exceptions}, notifications={summary.notifications}, "
                f"dismissed={summary.dismissed}, errors={summary.errors}"
            )
        return summary

    # =========================================================================
    # Side effects
    # =========================================================================

    def _persist(self, update: ContainerRiskUpdate) -> None:
        self.containers.update_container_risk(
            update.container_id,
            risk_level=update.assessment.risk_level.value,
            risk_reason=update.assessment.risk_reason,
        )
        update.persisted = True

    def _apply_side_effects(
        self,
        container: ContainerSnapshot,
        update: ContainerRiskUpdate,
        now: datetime,
    ) -> None:
        assessment = update.assessment
        transition = update.transition

        if assessment.should_create_exception and (transition.changed or transition.increased):
            self._replace_risk_alert(container, assessment, now)
            update.exception_created = True

        if assessment.should_notify and transition.increased:
            update.notifications_created = self._notify_risk_escalation(container, assessment)

        if transition.decreased:
            update.notifications_dismissed = self.notifications.dismiss_risk_notifications_for_container(
                container.id,
                assessment.risk_level.value,
            )

    def _replace_risk_alert(
        self,
        container: ContainerSnapshot,
        assessment: RiskAssessment,
        now: datetime,
    ) -> None:
        """Keep exactly one live risk-alert exception for the container."""
        self.exceptions.delete_risk_alert_exceptions(container.id)
        self.exceptions.create_exception(
            container_id=container.id,
            type=exception_type_for(assessment.risk_reasons).value,
            title=f"{assessment.risk_level.value.upper()} Risk Alert",
            description=assessment.description,
            timestamp=now.isoformat(),
        )
        logger.debug(
            f"Risk alert raised for {container.container_number}: "
            f"{assessment.risk_level.value} ({assessment.risk_score})"
        )

    def _notify_risk_escalation(
        self,
        container: ContainerSnapshot,
        assessment: RiskAssessment,
    ) -> int:
        """
        Send one notification per user.

        There is no assignment or role filtering: every user receives every
        escalation.
        """
        notification_type = notification_type_for(assessment.risk_reasons).value
        title = f"{container.container_number} - {assessment.risk_level.value.upper()} Risk"
        metadata = {
            "containerNumber": container.container_number,
            "riskLevel": assessment.risk_level.value,
            "riskScore": assessment.risk_score,
            "riskReasons": list(assessment.risk_reasons),
        }

        sent = 0
        for user in self.notifications.get_all_users():
            self.notifications.create_notification(
                user_id=user.id,
                type=notification_type,
                priority=assessment.notification_priority.value,
                title=title,
                message=assessment.description,
                entity_type=EntityType.CONTAINER.value,
                entity_id=container.id,
                metadata=dict(metadata),
            )
            sent += 1
        return sent
