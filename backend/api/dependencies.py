"""Shared dependencies for API routes."""

from services.progress import ProgressService
from services.storage import get_storage


def get_progress_service() -> ProgressService:
    return ProgressService(get_storage())
