import json

import pytest
from fastapi.testclient import TestClient

from sunshine.config import settings
from sunshine.main import app
from sunshine.services.dataset_service import parse_departments
from sunshine.services.index_service import SearchIndex
from sunshine.services.search_service import SearchService

DEPARTMENTS = {
    "Fire Department": {"email": "fire@x.gov", "contact_name": "Records Unit"},
    "Police Department": {"email": "police@x.gov"},
    "Department of Public Works": {"email": "dpw@x.gov", "url": "https://dpw.x.gov"},
    "Department of Public Health": {"email": "health@x.gov", "notes": "Use the portal."},
    "Public Library": {"email": "library@x.gov"},
    "Firearms Licensing": {"email": "licensing@x.gov"},
    "Ethics Commission": {"email": None},
}


class FakeScheduler:
    """Manual clock: timers fire only when the test advances time."""

    def __init__(self):
        self.now = 0.0
        self._timers = []

    def call_later(self, delay, callback):
        timer = _FakeTimer(self.now + delay, callback)
        self._timers.append(timer)
        return timer

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [t for t in self._timers if not t.cancelled and t.when <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.when)
            self._timers.remove(timer)
            self.now = timer.when
            timer.callback()
        self.now = target

    @property
    def scheduled(self):
        return [t for t in self._timers if not t.cancelled]


class _FakeTimer:
    def __init__(self, when, callback):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


@pytest.fixture
def dataset_file(tmp_path):
    path = tmp_path / "departments.json"
    path.write_text(json.dumps(DEPARTMENTS))
    return path


@pytest.fixture
def departments():
    return parse_departments(json.dumps(DEPARTMENTS))


@pytest.fixture
def index(departments):
    idx = SearchIndex.build(departments.values())
    yield idx
    idx.close()


@pytest.fixture
def search_service(index):
    return SearchService(index)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def client(dataset_file):
    original_dataset_path = settings.dataset_path
    settings.dataset_path = dataset_file
    with TestClient(app) as c:
        yield c
    settings.dataset_path = original_dataset_path
