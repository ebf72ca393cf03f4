"""
SQLAlchemy ORM Models for the container risk tracker.

This module exports all domain models and enums.
"""

# Enums
from app.models.enums import (
    ACTIVE_STATUSES,
    ContainerStatus,
    RiskLevel,
    NotificationPriority,
    ExceptionType,
    ExceptionCategory,
    NotificationType,
    EntityType,
)

# Base
from app.models.base import BaseModel, CreatedAtMixin, TimestampMixin, UUIDPrimaryKeyMixin

# Domain Models
from app.models.user import User
from app.models.container import Container
from app.models.exception import ContainerException
from app.models.notification import Notification

__all__ = [
    # Enums
    "ACTIVE_STATUSES",
    "ContainerStatus",
    "RiskLevel",
    "NotificationPriority",
    "ExceptionType",
    "ExceptionCategory",
    "NotificationType",
    "EntityType",
    # Base
    "BaseModel",
    "CreatedAtMixin",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    # Domain Models
    "User",
    "Container",
    "ContainerException",
    "Notification",
]
