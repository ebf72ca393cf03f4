"""
Pydantic schemas for API request/response validation.
"""

from app.schemas.base import BaseSchema, IDSchema, TimestampSchema
from app.schemas.container import ContainerResponse, ContainerListResponse
from app.schemas.exception import ExceptionResponse
from app.schemas.notification import (
    NotificationResponse,
    UnreadCountResponse,
    MarkAllReadResponse,
)
from app.schemas.risk import (
    RiskAssessmentResponse,
    RiskPreviewResponse,
    RiskTaskResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "IDSchema",
    "TimestampSchema",
    # Container
    "ContainerResponse",
    "ContainerListResponse",
    # Exception
    "ExceptionResponse",
    # Notification
    "NotificationResponse",
    "UnreadCountResponse",
    "MarkAllReadResponse",
    # Risk
    "RiskAssessmentResponse",
    "RiskPreviewResponse",
    "RiskTaskResponse",
]
