"""Unit test fixtures -- in-memory stores standing in for the SQLAlchemy ones."""
from dataclasses import replace
from types import SimpleNamespace
from uuid import uuid4

import pytest


class InMemoryContainerStore:

    def __init__(self, containers=()):
        self.containers = {c.id: c for c in containers}
        self.risk_writes = []
        self.fee_writes = []
        self.fail_on = set()

    def get_all_active_containers(self):
        return [c for c in self.containers.values() if c.is_active]

    def get_containers_with_lfd(self):
        return [c for c in self.containers.values() if c.last_free_day]

    def get_container(self, container_id):
        return self.containers.get(container_id)

    def update_container_risk(self, container_id, risk_level, risk_reason):
        if container_id in self.fail_on:
            raise RuntimeError("write failed")
        self.risk_writes.append((container_id, risk_level, risk_reason))
        self.containers[container_id] = replace(
            self.containers[container_id],
            risk_level=risk_level,
            risk_reason=risk_reason,
        )

    def update_demurrage_fee(self, container_id, fee):
        self.fee_writes.append((container_id, fee))
        self.containers[container_id] = replace(self.containers[container_id], demurrage_fee=fee)


class InMemoryExceptionStore:

    def __init__(self):
        self.rows = []

    def delete_risk_alert_exceptions(self, container_id):
        before = len(self.rows)
        self.rows = [r for r in self.rows if r["container_id"] != container_id]
        return before - len(self.rows)

    def create_exception(self, container_id, type, title, description, timestamp):
        row = dict(
            container_id=container_id,
            type=type,
            title=title,
            description=description,
            timestamp=timestamp,
        )
        self.rows.append(row)
        return row

    def for_container(self, container_id):
        return [r for r in self.rows if r["container_id"] == container_id]


class InMemoryNotificationStore:

    def __init__(self, user_count=2):
        self.users = [SimpleNamespace(id=uuid4()) for _ in range(user_count)]
        self.rows = []

    def get_all_users(self):
        return list(self.users)

    def create_notification(self, **fields):
        row = dict(fields, is_read=False)
        self.rows.append(row)
        return row

    def dismiss_risk_notifications_for_container(self, container_id, new_level):
        from app.models.enums import RiskLevel

        threshold = RiskLevel.rank_of(new_level)
        dismissed = 0
        for row in self.rows:
            level = (row.get("metadata") or {}).get("riskLevel")
            if (
                row["entity_id"] == container_id
                and not row["is_read"]
                and RiskLevel.rank_of(level) > threshold
            ):
                row["is_read"] = True
                dismissed += 1
        return dismissed

    def unread_for(self, container_id):
        return [r for r in self.rows if r["entity_id"] == container_id and not r["is_read"]]


@pytest.fixture
def container_store():
    return InMemoryContainerStore()


@pytest.fixture
def exception_store():
    return InMemoryExceptionStore()


@pytest.fixture
def notification_store():
    return InMemoryNotificationStore()


@pytest.fixture
def risk_service(container_store, exception_store, notification_store, now):
    from app.services.risk.engine import RiskAssessmentService

    return RiskAssessmentService(
        containers=container_store,
        exceptions=exception_store,
        notifications=notification_store,
        clock=lambda: now,
    )


@pytest.fixture
def add_container(container_store, make_container):
    """Create a snapshot and register it with the container store."""
    def _add(**kwargs):
        container = make_container(**kwargs)
        container_store.containers[container.id] = container
        return container
    return _add
