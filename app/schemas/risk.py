"""
Risk assessment Pydantic schemas.
"""
from typing import Optional
from uuid import UUID

from pydantic import Field

from app.schemas.base import BaseSchema


class RiskAssessmentResponse(BaseSchema):
    """Assessment of one container at one instant."""
    risk_level: str = Field(..., description="low, medium, high or critical")
    risk_score: int = Field(..., ge=0)
    risk_reasons: list[str]
    should_create_exception: bool
    should_notify: bool
    notification_priority: str


class RiskPreviewResponse(BaseSchema):
    """Fresh assessment compared with the stored level (nothing persisted)."""
    container_id: UUID
    container_number: str
    previous_level: Optional[str] = None
    changed: bool
    increased: bool
    decreased: bool
    assessment: RiskAssessmentResponse


class RiskTaskResponse(BaseSchema):
    """Queued risk task."""
    task_id: str
    status: str = "queued"
    message: str
