"""
Core package for the container risk tracker.
"""
from app.core.config import settings, get_settings
from app.core.celery_app import celery_app

__all__ = ["settings", "get_settings", "celery_app"]
