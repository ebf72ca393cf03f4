"""
Container API endpoints.

Containers are written by the tracking sync and the risk engine; the API
exposes them read-only.
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_async_session
from app.models import Container, ContainerException, RiskLevel
from app.schemas.container import ContainerResponse, ContainerListResponse
from app.schemas.exception import ExceptionResponse

router = APIRouter()


@router.get("", response_model=ContainerListResponse)
async def list_containers(
    risk_level: Optional[RiskLevel] = None,
    status: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    session: AsyncSession = Depends(get_async_session),
):
    """
    List containers with optional filtering.

    - **risk_level**: Filter by stored risk level
    - **status**: Filter by tracking status (e.g. in-transit)
    - **skip**: Number of records to skip (pagination)
    - **limit**: Maximum number of records to return
    """
    filters = []
    if risk_level is not None:
        filters.append(Container.risk_level == risk_level.value)
    if status is not None:
        filters.append(Container.status == status)

    query = (
        select(Container)
        .where(*filters)
        .order_by(Container.created_at.desc())
        .offset(skip)
        .limit(limit)
    )
    result = await session.execute(query)
    containers = result.scalars().all()

    total = await session.scalar(select(func.count(Container.id)).where(*filters))

    return ContainerListResponse(
        total=total or 0,
        containers=[ContainerResponse.model_validate(c) for c in containers],
    )


@router.get("/{container_id}", response_model=ContainerResponse)
async def get_container(
    container_id: UUID,
    session: AsyncSession = Depends(get_async_session),
):
    """Get a specific container by ID."""
    result = await session.execute(
        select(Container).where(Container.id == container_id)
    )
    container = result.scalar_one_or_none()

    if not container:
        raise HTTPException(status_code=404, detail="Container not found")

    return ContainerResponse.model_validate(container)


@router.get("/{container_id}/exceptions", response_model=list[ExceptionResponse])
async def list_container_exceptions(
    container_id: UUID,
    session: AsyncSession = Depends(get_async_session),
):
    """List exceptions raised against a container, newest first."""
    result = await session.execute(
        select(Container.id).where(Container.id == container_id)
    )
    if not result.scalar_one_or_none():
        raise HTTPException(status_code=404, detail="Container not found")

    result = await session.execute(
        select(ContainerException)
        .where(ContainerException.container_id == container_id)
        .order_by(ContainerException.created_at.desc())
    )
    return [ExceptionResponse.model_validate(e) for e in result.scalars().all()]
