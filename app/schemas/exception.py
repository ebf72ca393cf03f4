"""
Exception Pydantic schemas.
"""
from datetime import datetime
from uuid import UUID

from app.schemas.base import IDSchema


class ExceptionResponse(IDSchema):
    """Exception raised against a container."""
    container_id: UUID
    category: str
    type: str
    title: str
    description: str
    timestamp: str
    created_at: datetime
