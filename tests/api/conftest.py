"""API test fixtures -- helpers for configuring mock session returns."""
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock
from uuid import uuid4


def make_mock_result(scalar_value=None, scalars_list=None, rowcount=None):
    """Create a mock SQLAlchemy Result object."""
    result = MagicMock()
    result.scalar_one_or_none = MagicMock(return_value=scalar_value)

    scalars_mock = MagicMock()
    scalars_mock.all = MagicMock(return_value=scalars_list or [])
    scalars_mock.unique = MagicMock(return_value=scalars_mock)
    result.scalars = MagicMock(return_value=scalars_mock)
    result.first = MagicMock(return_value=None)
    if rowcount is None:
        rowcount = len(scalars_list) if scalars_list else (1 if scalar_value else 0)
    result.rowcount = rowcount

    return result


def make_mock_container(
    container_id=None,
    container_number="MSCU1234567",
    status="in-transit",
    risk_level=None,
    eta=None,
    last_free_day=None,
    hold_types=None,
):
    """Create a mock Container ORM object."""
    container = MagicMock()
    container.id = container_id or uuid4()
    container.container_number = container_number
    container.container_type = "40HC"
    container.carrier = "MSC"
    container.vessel_name = "MSC OSCAR"
    container.origin = "Shanghai"
    container.destination = "Los Angeles"
    container.status = status
    container.eta = eta
    container.last_free_day = last_free_day
    container.hold_types = hold_types or []
    container.terminal_status = None
    container.risk_level = risk_level
    container.risk_reason = None
    container.demurrage_fee = None
    container.daily_fee_rate = Decimal("150.00")
    container.created_at = datetime.now(timezone.utc)
    container.updated_at = datetime.now(timezone.utc)
    return container


def make_mock_exception(container_id=None, category="risk-alert"):
    """Create a mock ContainerException ORM object."""
    exception = MagicMock()
    exception.id = uuid4()
    exception.container_id = container_id or uuid4()
    exception.category = category
    exception.type = "DELAY"
    exception.title = "HIGH Risk Alert"
    exception.description = "Container marked as delayed"
    exception.timestamp = datetime.now(timezone.utc).isoformat()
    exception.created_at = datetime.now(timezone.utc)
    return exception


def make_mock_notification(user_id=None, is_read=False, meta=None):
    """Create a mock Notification ORM object."""
    notification = MagicMock()
    notification.id = uuid4()
    notification.user_id = user_id or uuid4()
    notification.type = "DELAY"
    notification.priority = "high"
    notification.title = "MSCU1234567 - HIGH Risk"
    notification.message = "Container marked as delayed"
    notification.entity_type = "CONTAINER"
    notification.entity_id = uuid4()
    notification.meta = meta if meta is not None else {"riskLevel": "high"}
    notification.is_read = is_read
    notification.read_at = None
    notification.created_at = datetime.now(timezone.utc)
    return notification
