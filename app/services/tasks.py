"""
Celery tasks for the container risk tracker.

The scheduled risk cycle and on-demand single-container assessments run here,
against a sync engine since workers are not async.
"""
from uuid import UUID
import logging

from app.core.celery_app import celery_app
from app.db.database import create_sync_engine, create_sync_session_maker
from app.services.scheduler import ContainerNotFoundError, RiskScheduler

logger = logging.getLogger(__name__)

# Create sync engine for Celery workers (they can't use async)
sync_engine = create_sync_engine()
SyncSession = create_sync_session_maker(sync_engine)

# One scheduler (and so one single-flight guard) per worker process
risk_scheduler = RiskScheduler(session_factory=SyncSession)


@celery_app.task(
    bind=True,
    name="app.services.tasks.run_risk_cycle",
    queue="risk",
    ignore_result=False,
)
def run_risk_cycle(self) -> dict:
    """
    Run one risk cycle: refresh, bulk assessment, demurrage.

    Not retried; the next beat tick runs a fresh cycle.

    Returns:
        CycleResult as a dict
    """
    logger.info(f"Starting risk cycle (task {self.request.id})")
    result = risk_scheduler.run_cycle()

    if result.skipped:
        logger.info("Risk cycle skipped: previous cycle still running")
    elif result.failed:
        logger.error(f"Risk cycle failed: {result.error}")
    return result.to_dict()


@celery_app.task(
    bind=True,
    name="app.services.tasks.assess_container",
    max_retries=0,
)
def assess_container(self, container_id: str) -> dict:
    """
    Assess one container and apply the transition side effects.

    Args:
        container_id: UUID of the container

    Returns:
        ContainerRiskUpdate as a dict
    """
    logger.info(f"Assessing container {container_id}")
    try:
        update = risk_scheduler.assess_container(UUID(container_id))
    except ContainerNotFoundError:
        logger.warning(f"Container {container_id} not found, nothing to assess")
        raise
    except Exception as e:
        logger.error(f"Assessment failed for container {container_id}: {e}")
        raise

    logger.info(
        f"Container {update.container_number} assessed: "
        f"{update.assessment.risk_level.value} ({update.assessment.risk_score})"
    )
    return update.to_dict()
