import os
import pathlib
import sys

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_TIMEZONE", "Asia/Bangkok")

from datetime import timedelta

import pytest

from ho_connect.application.instance import ClientInstance
from ho_connect.domain.entities import Employee
from ho_connect.infrastructure.database import create_session_factory, initialize_database
from ho_connect.infrastructure.notifications import ChangeSignalBus
from ho_connect.infrastructure.record_store import RecordStore
from ho_connect.infrastructure.serialization import encode_collection
from ho_connect.infrastructure.storage_keys import EMPLOYEES_KEY
from ho_connect.utils import now_in_app_timezone


class ManualHandle:
    def __init__(self, when, callback, args):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Deterministic stand-in for the event loop timers."""

    def __init__(self):
        self.now = 0.0
        self._handles = []

    def time(self):
        return self.now

    def call_later(self, delay, callback, *args):
        handle = ManualHandle(self.now + delay, callback, args)
        self._handles.append(handle)
        return handle

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [h for h in self._handles if not h.cancelled and h.when <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self._handles.remove(handle)
            self.now = handle.when
            handle.callback(*handle.args)
        self.now = target

    def pending(self):
        return sum(1 for handle in self._handles if not handle.cancelled)


def make_employee(employee_id, name, department="Sales", *, minutes_ago=None):
    last_active = None
    if minutes_ago is not None:
        last_active = now_in_app_timezone() - timedelta(minutes=minutes_ago)
    return Employee(id=employee_id, name=name, department=department, last_active=last_active)


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def session_factory():
    factory = create_session_factory("sqlite://")
    initialize_database(factory.kw["bind"])
    yield factory
    factory.kw["bind"].dispose()


@pytest.fixture()
def bus():
    return ChangeSignalBus()


@pytest.fixture()
def store(session_factory, bus):
    return RecordStore(session_factory, bus)


@pytest.fixture()
def directory(store):
    """Seed alice, bob and carol in the shared directory."""

    employees = [
        make_employee("u-alice", "alice", "Sales"),
        make_employee("u-bob", "bob", "Logistics"),
        make_employee("u-carol", "carol", "Logistics"),
    ]
    store.write(EMPLOYEES_KEY, encode_collection(EMPLOYEES_KEY, employees))
    return employees


@pytest.fixture()
def open_instance(store, scheduler):
    """Return a factory opening started instances, closed after the test."""

    opened = []

    def _open(instance_id=None):
        instance = ClientInstance(store, scheduler, instance_id=instance_id).start()
        opened.append(instance)
        return instance

    yield _open
    for instance in opened:
        instance.close()
