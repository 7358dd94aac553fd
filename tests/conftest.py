# tests/conftest.py

from __future__ import annotations

import datetime as dt

import pytest

from models import Client, Task
from user import User

TODAY = dt.date(2024, 12, 20)


@pytest.fixture()
def today() -> dt.date:
    """Fixed reference date so status buckets do not depend on the clock."""
    return TODAY


@pytest.fixture()
def user() -> User:
    """User seeded with the demonstration data (3 clients, 1 task)."""
    return User.with_sample_data()


@pytest.fixture()
def empty_user() -> User:
    return User()


@pytest.fixture()
def client() -> Client:
    return Client("Maciek", "Szymon", "123456789", "good student")


@pytest.fixture()
def task() -> Task:
    return Task.from_strings("Matematyka", "123", 2, "2024-11-03", "11:30")


@pytest.fixture()
def make_task():
    """Factory for tasks dated relative to the fixed reference date."""

    def _make(subject: str = "Math", days_ahead: int = 0, client_id: int = 1) -> Task:
        return Task(subject, "", client_id, TODAY + dt.timedelta(days=days_ahead), dt.time(10, 0))

    return _make
