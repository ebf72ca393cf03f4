"""Seed script to create dashboard users and sample containers.

Run this after `alembic upgrade head`:
    python seed_demo_data.py

The containers cover the main risk paths (LFD passed with a hold, customs
clearance past ETA, stale tracking, quiet transit) so the first risk cycle
produces exceptions and notifications.
"""
import asyncio
from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from app.db.database import async_session_maker
from app.models import Container, ContainerStatus, User


USERS = [
    {"username": "ops", "email": "ops@example.com", "name": "Operations", "role": "Admin"},
    {"username": "broker", "email": "broker@example.com", "name": "Customs Broker", "role": "User"},
]


def _demo_containers(now: datetime) -> list[dict]:
    today = now.date()
    return [
        {
            "container_number": "MSCU1234567",
            "carrier": "MSC",
            "status": ContainerStatus.AT_TERMINAL.value,
            "last_free_day": (today - timedelta(days=3)).isoformat(),
            "hold_types": ["CUSTOMS"],
        },
        {
            "container_number": "MAEU7654321",
            "carrier": "Maersk",
            "status": ContainerStatus.CUSTOMS_CLEARANCE.value,
            "eta": (now - timedelta(days=1)).isoformat(),
            "last_free_day": (today + timedelta(days=1)).isoformat(),
        },
        {
            "container_number": "CMAU1112223",
            "carrier": "CMA CGM",
            "status": ContainerStatus.IN_TRANSIT.value,
            "eta": (now + timedelta(days=40)).isoformat(),
        },
        {
            "container_number": "HLXU9998887",
            "carrier": "Hapag-Lloyd",
            "status": ContainerStatus.LOADED.value,
            "eta": (now + timedelta(days=12)).isoformat(),
        },
    ]


async def seed_demo_data():
    """Create users and containers that do not exist yet."""
    now = datetime.now(timezone.utc)

    async with async_session_maker() as session:
        for data in USERS:
            result = await session.execute(select(User).where(User.username == data["username"]))
            if result.scalar_one_or_none():
                print(f"[X] User '{data['username']}' already exists. Skipping.")
                continue
            session.add(User(**data))
            print(f"[OK] User '{data['username']}' created")

        for data in _demo_containers(now):
            result = await session.execute(
                select(Container).where(Container.container_number == data["container_number"])
            )
            if result.scalar_one_or_none():
                print(f"[X] Container {data['container_number']} already exists. Skipping.")
                continue
            session.add(Container(**data))
            print(f"[OK] Container {data['container_number']} created ({data['status']})")

        await session.commit()

    print("\n[!] Run a risk cycle to score the new containers:")
    print("    celery -A app.core.celery_app call app.services.tasks.run_risk_cycle")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
