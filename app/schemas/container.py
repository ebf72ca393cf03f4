"""
Container Pydantic schemas.
"""
from decimal import Decimal
from typing import Optional

from pydantic import Field

from app.schemas.base import BaseSchema, IDSchema, TimestampSchema


class ContainerResponse(IDSchema, TimestampSchema):
    """Container with tracking and risk fields."""
    container_number: str
    container_type: str
    carrier: Optional[str] = None
    vessel_name: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None

    # Tracking
    status: str
    eta: Optional[str] = None
    last_free_day: Optional[str] = None
    hold_types: list[str] = Field(default_factory=list)
    terminal_status: Optional[str] = None

    # Risk
    risk_level: Optional[str] = None
    risk_reason: Optional[str] = None

    # Demurrage
    demurrage_fee: Optional[Decimal] = None
    daily_fee_rate: Optional[Decimal] = None


class ContainerListResponse(BaseSchema):
    """Schema for paginated container list responses."""
    total: int
    containers: list[ContainerResponse]
