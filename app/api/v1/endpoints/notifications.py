"""
Notification API endpoints.

Notifications are per user; every route is scoped by the user id in the path.
"""
from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_async_session
from app.models import Notification
from app.schemas.notification import (
    NotificationResponse,
    UnreadCountResponse,
    MarkAllReadResponse,
)

router = APIRouter()


async def _get_user_notification(
    session: AsyncSession,
    user_id: UUID,
    notification_id: UUID,
) -> Notification:
    result = await session.execute(
        select(Notification).where(
            Notification.id == notification_id,
            Notification.user_id == user_id,
        )
    )
    notification = result.scalar_one_or_none()
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")
    return notification


@router.get("/{user_id}/notifications", response_model=list[NotificationResponse])
async def list_notifications(
    user_id: UUID,
    unread_only: bool = False,
    limit: int = Query(50, ge=1, le=500),
    session: AsyncSession = Depends(get_async_session),
):
    """
    List a user's notifications, newest first.

    - **unread_only**: Only unread notifications
    - **limit**: Maximum number of records to return
    """
    query = select(Notification).where(Notification.user_id == user_id)
    if unread_only:
        query = query.where(Notification.is_read.is_(False))
    query = query.order_by(Notification.created_at.desc()).limit(limit)

    result = await session.execute(query)
    return [NotificationResponse.model_validate(n) for n in result.scalars().all()]


@router.get("/{user_id}/notifications/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    user_id: UUID,
    session: AsyncSession = Depends(get_async_session),
):
    """Number of unread notifications for the bell badge."""
    count = await session.scalar(
        select(func.count(Notification.id)).where(
            Notification.user_id == user_id,
            Notification.is_read.is_(False),
        )
    )
    return UnreadCountResponse(unread=count or 0)


@router.patch("/{user_id}/notifications/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    user_id: UUID,
    session: AsyncSession = Depends(get_async_session),
):
    """Mark every unread notification of the user as read."""
    result = await session.execute(
        update(Notification)
        .where(
            Notification.user_id == user_id,
            Notification.is_read.is_(False),
        )
        .values(is_read=True, read_at=datetime.now(timezone.utc))
    )
    return MarkAllReadResponse(updated=result.rowcount or 0)


@router.patch(
    "/{user_id}/notifications/{notification_id}/read",
    response_model=NotificationResponse,
)
async def mark_read(
    user_id: UUID,
    notification_id: UUID,
    session: AsyncSession = Depends(get_async_session),
):
    """Mark a single notification as read."""
    notification = await _get_user_notification(session, user_id, notification_id)
    notification.mark_read()
    await session.flush()
    await session.refresh(notification)
    return NotificationResponse.model_validate(notification)


@router.delete("/{user_id}/notifications/{notification_id}", status_code=204)
async def delete_notification(
    user_id: UUID,
    notification_id: UUID,
    session: AsyncSession = Depends(get_async_session),
):
    """Delete a notification."""
    notification = await _get_user_notification(session, user_id, notification_id)
    await session.delete(notification)
    await session.flush()
