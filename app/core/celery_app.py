"""
Celery application configuration.

Celery runs the periodic risk assessment cycle and on-demand single-container
assessments outside the FastAPI process.

Usage:
    # Start worker (from project root):
    celery -A app.core.celery_app worker --loglevel=info

    # Start beat (fires the scheduled risk cycle):
    celery -A app.core.celery_app beat --loglevel=info
"""
from celery import Celery

from app.core.config import settings

# Create Celery application
celery_app = Celery(
    "container_risk",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["app.services.tasks"],  # Auto-discover tasks
)

# Celery configuration
celery_app.conf.update(
    # Task settings
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    # Task execution
    task_acks_late=True,  # Acknowledge after task completes (safety)
    task_reject_on_worker_lost=True,

    # Result backend
    result_expires=86400,  # Results expire after 24 hours

    # Worker settings
    worker_prefetch_multiplier=1,  # Cycles are sequential
    worker_concurrency=1,

    # Task routing
    task_routes={
        "app.services.tasks.run_risk_cycle": {"queue": "risk"},
        "app.services.tasks.*": {"queue": "default"},
    },

    # Task time limits
    task_soft_time_limit=600,  # Soft limit: 10 minutes
    task_time_limit=660,  # Hard limit: 11 minutes
)

# Define task queues
celery_app.conf.task_queues = {
    "default": {
        "exchange": "default",
        "routing_key": "default",
    },
    "risk": {
        "exchange": "risk",
        "routing_key": "risk",
    },
}

# Periodic risk cycle
celery_app.conf.beat_schedule = {
    "risk-assessment-cycle": {
        "task": "app.services.tasks.run_risk_cycle",
        "schedule": settings.risk_assessment_interval_minutes * 60.0,
        "options": {"queue": "risk"},
    },
}
