"""Shared test fixtures and configuration for the test suite."""

import itertools
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Add the parent directory to the path for imports
sys.path.append(str(Path(__file__).parent.parent))

from taskpad.config import Settings
from taskpad.main import create_app
from taskpad.models.task import Priority, Task
from taskpad.services.storage import MemoryStorage
from taskpad.services.task_store import TaskStore


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at 2025-11-12 09:00 UTC."""
    return FakeClock(datetime(2025, 11, 12, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def id_factory():
    """Sequential ids: task-1, task-2, ..."""
    counter = itertools.count(1)
    return lambda: f"task-{next(counter)}"


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def task_store(memory_storage, clock, id_factory) -> TaskStore:
    """Create an empty task store for testing."""
    return TaskStore(memory_storage, clock=clock, id_factory=id_factory)


@pytest.fixture
def make_task():
    """Factory for committed tasks with sensible defaults."""
    def _make(title="Task", **overrides) -> Task:
        fields = {
            "title": title,
            "priority": Priority.MEDIUM,
            "created_at": datetime(2025, 11, 1, tzinfo=timezone.utc),
            "updated_at": datetime(2025, 11, 1, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return Task(**fields)
    return _make


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Create test settings with a temporary storage file."""
    return Settings(
        storage_path=tmp_path / "state.json",
        seed_demo_tasks=False,
        log_level="DEBUG",
        environment="test",
    )


@pytest.fixture
def client(test_settings) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_task_data():
    """Sample task draft for testing."""
    return {
        "title": "Buy groceries",
        "description": "Milk, eggs",
        "priority": "Low",
        "dueDate": "2025-11-20",
    }
