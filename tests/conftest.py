# tests/conftest.py
from datetime import date, datetime, time, timedelta

import pytest
from fastapi.testclient import TestClient

from helpdesk.core.config import Settings
from helpdesk.core.database import build_engine, build_session_factory
from helpdesk.main import create_app
from helpdesk.storage.database import DatabaseStorage
from helpdesk.storage.memory import MemoryStorage


class FakeClock:
    """Advances one second per reading so every record gets a distinct timestamp."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current += timedelta(seconds=1)
        return now

    def set(self, moment: datetime) -> None:
        self.current = moment


@pytest.fixture
def clock():
    return FakeClock(datetime.combine(date.today(), time(9, 0)))


@pytest.fixture(params=["memory", "database"])
def storage(request, clock):
    if request.param == "memory":
        yield MemoryStorage(clock=clock)
        return
    engine = build_engine("sqlite://")
    yield DatabaseStorage(build_session_factory(engine), clock=clock)
    engine.dispose()


@pytest.fixture
def settings():
    return Settings(_env_file=None, STORAGE_BACKEND="memory", LOG_LEVEL="WARNING")


@pytest.fixture
def app(settings, storage):
    return create_app(settings=settings, storage=storage)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def issue_body(**overrides):
    body = {
        "title": "Printer offline",
        "description": "The office printer stopped responding this morning.",
        "customerName": "Ada Lovelace",
        "customerEmail": "ada@example.com",
    }
    body.update(overrides)
    return body


@pytest.fixture(name="issue_body")
def issue_body_fixture():
    return issue_body
