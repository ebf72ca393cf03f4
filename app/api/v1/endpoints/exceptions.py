"""
Exception API endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_async_session
from app.models import ContainerException, ExceptionCategory
from app.schemas.exception import ExceptionResponse

router = APIRouter()


@router.get("", response_model=list[ExceptionResponse])
async def list_exceptions(
    category: Optional[ExceptionCategory] = None,
    limit: int = Query(50, ge=1, le=500),
    session: AsyncSession = Depends(get_async_session),
):
    """
    Latest exceptions across all containers.

    - **category**: Only exceptions of this category (e.g. risk-alert)
    - **limit**: Maximum number of records to return
    """
    query = select(ContainerException)
    if category is not None:
        query = query.where(ContainerException.category == category.value)
    query = query.order_by(ContainerException.created_at.desc()).limit(limit)

    result = await session.execute(query)
    return [ExceptionResponse.model_validate(e) for e in result.scalars().all()]
