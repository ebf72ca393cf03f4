"""
Risk assessment API endpoints.

Assessments with side effects run in Celery; the preview computes a fresh
assessment in-process without writing anything.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_async_session
from app.models import Container
from app.schemas.risk import (
    RiskAssessmentResponse,
    RiskPreviewResponse,
    RiskTaskResponse,
)
from app.services.risk import ContainerSnapshot, RiskTransition, assess_container_risk
from app.services.tasks import run_risk_cycle, assess_container

router = APIRouter()


async def _load_container(session: AsyncSession, container_id: UUID) -> Container:
    result = await session.execute(
        select(Container).where(Container.id == container_id)
    )
    container = result.scalar_one_or_none()
    if not container:
        raise HTTPException(status_code=404, detail="Container not found")
    return container


@router.post("/assess", response_model=RiskTaskResponse, status_code=202)
async def trigger_risk_cycle():
    """
    Queue a full risk cycle (bulk assessment then demurrage).

    A cycle that reaches the worker while another is running is skipped.
    """
    task = run_risk_cycle.delay()
    return RiskTaskResponse(
        task_id=task.id,
        message="Risk assessment cycle queued",
    )


@router.post(
    "/containers/{container_id}/assess",
    response_model=RiskTaskResponse,
    status_code=202,
)
async def trigger_container_assessment(
    container_id: UUID,
    session: AsyncSession = Depends(get_async_session),
):
    """Queue an assessment of one container, with all side effects."""
    container = await _load_container(session, container_id)

    task = assess_container.delay(str(container.id))
    return RiskTaskResponse(
        task_id=task.id,
        message=f"Risk assessment queued for {container.container_number}",
    )


@router.get("/containers/{container_id}/preview", response_model=RiskPreviewResponse)
async def preview_container_risk(
    container_id: UUID,
    session: AsyncSession = Depends(get_async_session),
):
    """Assess a container now without persisting or notifying."""
    container = await _load_container(session, container_id)

    snapshot = ContainerSnapshot.from_model(container)
    assessment = assess_container_risk(snapshot)
    transition = RiskTransition(snapshot.risk_level, assessment.risk_level)

    return RiskPreviewResponse(
        container_id=snapshot.id,
        container_number=snapshot.container_number,
        previous_level=snapshot.risk_level,
        changed=transition.changed,
        increased=transition.increased,
        decreased=transition.decreased,
        assessment=RiskAssessmentResponse(**assessment.to_dict()),
    )
