"""Dependency injection helpers for FastAPI."""

from functools import lru_cache

from fastapi import HTTPException, Request, status

from .config import Settings
from .services.preferences import ThemePreferences
from .services.storage import JsonFileStorage, StorageAdapter
from .services.task_store import TaskStore, demo_tasks


@lru_cache()
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return Settings()


def build_storage(settings: Settings) -> StorageAdapter:
    """Storage adapter for the configured state file."""
    return JsonFileStorage(settings.storage_path)


def build_task_store(settings: Settings, storage: StorageAdapter) -> TaskStore:
    """Task store wired to the configured storage key and defaults."""
    return TaskStore(
        storage,
        default_tasks=demo_tasks() if settings.seed_demo_tasks else [],
        tasks_key=settings.tasks_key,
    )


def get_task_store(request: Request) -> TaskStore:
    """Get the task store owned by the running app."""
    store = getattr(request.app.state, "task_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Task store is not initialized"
        )
    return store


def get_theme_preferences(request: Request) -> ThemePreferences:
    """Get the theme preferences owned by the running app."""
    preferences = getattr(request.app.state, "theme_preferences", None)
    if preferences is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Preferences are not initialized"
        )
    return preferences
