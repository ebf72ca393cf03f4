"""
Notification Pydantic schemas.
"""
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import AliasChoices, Field

from app.schemas.base import BaseSchema, IDSchema


class NotificationResponse(IDSchema):
    """Notification as shown in the bell."""
    user_id: Optional[UUID] = None
    type: str
    priority: str
    title: str
    message: str
    entity_type: Optional[str] = None
    entity_id: Optional[UUID] = None
    # ORM attribute is ``meta``; the column and API key are "metadata"
    metadata: Optional[dict[str, Any]] = Field(
        None,
        validation_alias=AliasChoices("meta", "metadata"),
    )
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: datetime


class UnreadCountResponse(BaseSchema):
    unread: int


class MarkAllReadResponse(BaseSchema):
    updated: int
