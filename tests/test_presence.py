"""Tests for the presence window."""

from datetime import timedelta

from conftest import make_employee

from ho_connect.application.use_cases.presence import is_online, presence_stats
from ho_connect.utils import now_in_app_timezone


def _active(delta_ms):
    employee = make_employee("u-1", "alice")
    employee.last_active = NOW - timedelta(milliseconds=delta_ms)
    return employee


NOW = now_in_app_timezone()


def test_employee_active_just_inside_window_is_online():
    assert is_online(_active(299_999), NOW) is True


def test_employee_active_just_outside_window_is_offline():
    assert is_online(_active(300_001), NOW) is False


def test_employee_without_activity_is_offline():
    assert is_online(make_employee("u-2", "bob"), NOW) is False


def test_custom_window():
    assert is_online(_active(30_000), NOW, window=timedelta(seconds=10)) is False


def test_presence_stats_recounts_directory():
    employees = [
        _active(1_000),
        make_employee("u-2", "bob"),
        make_employee("u-3", "carol", minutes_ago=10),
    ]

    snapshot = presence_stats(employees, NOW)

    assert snapshot.online_count == 1
    assert snapshot.offline_count == 2
    assert [employee.id for employee in snapshot.online_users] == ["u-1"]
