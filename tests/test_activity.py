"""Tests for the mutation sites that raise notifications."""

import pytest

from ho_connect.application.use_cases import (
    add_issue_comment,
    add_task,
    convert_issue_to_task,
    create_issue,
    delete_employee,
    login,
    logout,
    register_employee,
    send_chat_message,
    sign_up,
    update_sub_task,
    update_task_status,
)
from ho_connect.application.use_cases.activity import room_label
from ho_connect.application.use_cases.presence import is_online
from ho_connect.domain.entities import TaskStatus, direct_room_id
from ho_connect.infrastructure.serialization import decode_payload
from ho_connect.infrastructure.storage_keys import EMPLOYEES_KEY, TASKS_KEY


@pytest.fixture()
def alice(store, directory, open_instance):
    instance = open_instance("instance-alice")
    login(instance.state, store, "u-alice", origin=instance.id)
    return instance


def _stored_employees(store):
    return {emp.id: emp for emp in decode_payload(EMPLOYEES_KEY, store.read_raw(EMPLOYEES_KEY))}


def test_login_stamps_last_active(store, alice):
    assert alice.state.current_user.last_active is not None
    assert _stored_employees(store)["u-alice"].last_active is not None


def test_login_unknown_employee_fails(store, directory, open_instance):
    instance = open_instance()

    with pytest.raises(ValueError):
        login(instance.state, store, "u-ghost", origin=instance.id)
    assert instance.state.current_user is None


def test_sign_up_creates_and_logs_in(store, directory, open_instance):
    instance = open_instance()

    employee = sign_up(
        instance.state, store, name="dave", department="Warehouse", origin=instance.id
    )

    assert employee.id.startswith("u-")
    assert employee.stats.messages_sent == 0
    assert instance.state.current_user_id == employee.id
    assert employee.id in _stored_employees(store)
    assert "Warehouse" in instance.state.available_departments()


def test_registered_employee_starts_offline(store, directory, open_instance):
    instance = open_instance()

    employee = register_employee(
        instance.state, store, name="erin", department="Finance", origin=None
    )

    stored = _stored_employees(store)[employee.id]
    assert instance.state.current_user is None
    assert stored.last_active is None
    assert is_online(stored) is False


def test_register_employee_requires_name(store, directory, open_instance):
    instance = open_instance()

    with pytest.raises(ValueError):
        register_employee(instance.state, store, name="  ", department="Finance", origin=None)
    assert len(_stored_employees(store)) == len(directory)


def test_deleting_current_employee_logs_out(store, alice):
    assert delete_employee(alice.state, store, "u-alice", origin=alice.id) is True

    assert alice.state.current_user is None
    assert "u-alice" not in _stored_employees(store)
    assert delete_employee(alice.state, store, "u-alice", origin=alice.id) is False


def test_logout_keeps_directory(store, alice):
    assert logout(alice.state).id == "u-alice"
    assert "u-alice" in _stored_employees(store)


def test_group_chat_mentions_notify_each_resolved_employee(store, alice):
    send_chat_message(
        alice.state,
        store,
        alice.dispatcher,
        room="GLOBAL",
        text="@bob and @carol please sync, @alice too",
        origin=alice.id,
    )

    targets = [record.target_user_id for record in alice.state.notifications]
    assert sorted(targets) == ["u-bob", "u-carol"]
    assert all(record.type == "mention" for record in alice.state.notifications)
    assert all("alice" in record.title for record in alice.state.notifications)
    assert "All departments" in alice.state.notifications[0].message
    assert _stored_employees(store)["u-alice"].stats.messages_sent == 1


def test_direct_message_notifies_partner(store, alice):
    room = direct_room_id("u-alice", "u-bob")

    send_chat_message(
        alice.state, store, alice.dispatcher, room=room, text="@carol hi", origin=alice.id
    )

    (record,) = alice.state.notifications
    assert record.type == "info"
    assert record.target_user_id == "u-bob"
    assert record.department == "Sales"
    assert record.title == "📩 New message from alice"


def test_chat_requires_login(store, directory, open_instance):
    instance = open_instance()

    with pytest.raises(ValueError):
        send_chat_message(
            instance.state, store, instance.dispatcher, room="GLOBAL", text="hi", origin=None
        )


def test_room_label():
    assert room_label("GLOBAL") == "All departments"
    assert room_label("DEPT/Logistics") == "Logistics"


def test_task_assignment_targets_assignee(store, alice):
    task = add_task(
        alice.state,
        store,
        alice.dispatcher,
        title="Restock",
        description="Shelf 4",
        department="Logistics",
        assignee_id="u-bob",
        assignee_name="bob",
        deadline="2024-02-01",
        sub_task_labels=["count", "", "order"],
        origin=alice.id,
    )

    assert task.id.startswith("t-")
    assert task.creator_id == "u-alice"
    assert [item.label for item in task.sub_tasks] == ["count", "order"]
    (record,) = alice.state.notifications
    assert record.type == "info"
    assert record.target_user_id == "u-bob"
    assert record.department == "Logistics"
    assert alice.toasts.visible_ids() == []
    stored = decode_payload(TASKS_KEY, store.read_raw(TASKS_KEY))
    assert [item.id for item in stored] == [task.id]


def test_task_completion_is_broadcast(store, alice):
    task = add_task(
        alice.state,
        store,
        alice.dispatcher,
        title="Restock",
        description="",
        department="Logistics",
        assignee_id="",
        assignee_name="",
        deadline="",
        origin=alice.id,
    )

    update_task_status(
        alice.state, store, alice.dispatcher, task.id, TaskStatus.IN_PROGRESS, origin=alice.id
    )
    assert len(alice.state.notifications) == 1

    update_task_status(
        alice.state, store, alice.dispatcher, task.id, TaskStatus.COMPLETED, origin=alice.id
    )
    record = alice.state.notifications[0]
    assert record.type == "success"
    assert record.is_broadcast
    assert alice.state.find_task(task.id).status is TaskStatus.COMPLETED


def test_update_sub_task(store, alice):
    task = add_task(
        alice.state,
        store,
        alice.dispatcher,
        title="Audit",
        description="",
        department="HR",
        assignee_id="",
        assignee_name="",
        deadline="",
        sub_task_labels=["collect"],
        origin=alice.id,
    )
    sub_task_id = task.sub_tasks[0].id

    updated = update_sub_task(alice.state, store, task.id, sub_task_id, True, origin=alice.id)

    assert updated.sub_tasks[0].is_done is True
    with pytest.raises(ValueError):
        update_sub_task(alice.state, store, task.id, "missing", True, origin=alice.id)


def test_issue_comment_mentions_and_stats(store, alice):
    issue = create_issue(
        alice.state, store, department="Logistics", text="Truck delayed again", origin=alice.id
    )

    comment = add_issue_comment(
        alice.state, store, alice.dispatcher, issue.id, text="@bob can you check?", origin=alice.id
    )

    (record,) = alice.state.notifications
    assert record.type == "mention"
    assert record.target_user_id == "u-bob"
    assert "Truck delayed again" in record.message
    assert alice.state.find_issue(issue.id).comments == [comment]
    stats = _stored_employees(store)["u-alice"].stats
    assert stats.issues_reported == 1
    assert stats.comments_made == 1


def test_convert_issue_assigns_first_department_employee(store, alice):
    issue = create_issue(
        alice.state, store, department="Logistics", text="Truck delayed again", origin=alice.id
    )

    task = convert_issue_to_task(alice.state, store, alice.dispatcher, issue.id, origin=alice.id)

    assert task.assignee_id == "u-bob"
    assert task.department == "Logistics"
    assert task.title.startswith("[Fix] Truck delayed again")
    assert alice.state.notifications[0].target_user_id == "u-bob"


def test_convert_issue_without_department_staff_is_unassigned(store, alice):
    issue = create_issue(
        alice.state, store, department="Marketing", text="Banner is wrong", origin=alice.id
    )

    task = convert_issue_to_task(alice.state, store, alice.dispatcher, issue.id, origin=alice.id)

    assert task.assignee_id == ""
    assert alice.state.notifications[0].is_broadcast
