"""Integration tests for the session, notification and presence endpoints."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[4]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from ho_connect.infrastructure.database import create_session_factory
from ho_connect.infrastructure.notifications import ChangeSignalBus, InstanceConnectionManager


@pytest.fixture()
def client():
    """Return a test client bound to a fresh in-memory store."""

    from main import create_app

    app = create_app(
        session_factory=create_session_factory("sqlite://"),
        bus=ChangeSignalBus(),
        connection_manager=InstanceConnectionManager(),
    )
    with TestClient(app) as test_client:
        yield test_client


def _sign_up(client: TestClient, name: str, department: str) -> dict:
    response = client.post("/employees/", json={"name": name, "department": department})
    assert response.status_code == 201
    return response.json()


def test_sign_up_opens_a_logged_in_session(client: TestClient) -> None:
    session = _sign_up(client, "alice", "Sales")

    assert session["user"]["name"] == "alice"
    assert session["user"]["is_online"] is True
    assert "Sales" in session["departments"]

    employees = client.get("/employees/").json()
    assert [employee["name"] for employee in employees] == ["alice"]


def test_unknown_session_is_not_found(client: TestClient) -> None:
    assert client.get("/sessions/missing/notifications").status_code == 404
    assert client.post("/sessions/", json={"employee_id": "u-ghost"}).status_code == 404


def test_mention_reaches_only_the_target_session(client: TestClient) -> None:
    alice = _sign_up(client, "alice", "Sales")
    bob = _sign_up(client, "bob", "Logistics")
    carol = _sign_up(client, "carol", "Logistics")

    response = client.post(
        f"/sessions/{alice['id']}/chat", json={"room": "GLOBAL", "text": "@bob check this"}
    )
    assert response.status_code == 201

    bob_toasts = client.get(f"/sessions/{bob['id']}/toasts").json()
    assert len(bob_toasts) == 1
    assert bob_toasts[0]["notification"]["type"] == "mention"
    assert bob_toasts[0]["lifetime"] == 10.0
    assert "alice" in bob_toasts[0]["notification"]["title"]

    assert client.get(f"/sessions/{carol['id']}/toasts").json() == []
    carol_ledger = client.get(f"/sessions/{carol['id']}/notifications").json()
    assert carol_ledger == {"items": [], "unread_count": 0}

    bob_ledger = client.get(f"/sessions/{bob['id']}/notifications").json()
    assert bob_ledger["unread_count"] == 1
    notification_id = bob_ledger["items"][0]["id"]

    foreign = client.post(f"/sessions/{carol['id']}/notifications/{notification_id}/read")
    assert foreign.status_code == 404
    assert client.get(f"/sessions/{bob['id']}/notifications").json()["unread_count"] == 1

    read = client.post(f"/sessions/{bob['id']}/notifications/{notification_id}/read")
    assert read.status_code == 200
    assert read.json()["is_read"] is True
    assert client.get(f"/sessions/{bob['id']}/notifications").json()["unread_count"] == 0

    dismissed = client.delete(f"/sessions/{bob['id']}/toasts/{notification_id}")
    assert dismissed.status_code == 204
    assert client.get(f"/sessions/{bob['id']}/toasts").json() == []
    assert client.delete(f"/sessions/{bob['id']}/toasts/{notification_id}").status_code == 404


def test_read_all_and_clear_are_shared(client: TestClient) -> None:
    alice = _sign_up(client, "alice", "Sales")
    bob = _sign_up(client, "bob", "Logistics")

    task = client.post(
        f"/sessions/{alice['id']}/tasks",
        json={"title": "Restock", "department": "Logistics", "assignee_id": bob["user"]["id"]},
    )
    assert task.status_code == 201
    completed = client.post(
        f"/sessions/{alice['id']}/tasks/{task.json()['id']}/status",
        json={"status": "completed"},
    )
    assert completed.json()["status"] == "completed"

    bob_ledger = client.get(f"/sessions/{bob['id']}/notifications").json()
    assert bob_ledger["unread_count"] == 2
    assert [item["type"] for item in bob_ledger["items"]] == ["success", "info"]

    result = client.post(f"/sessions/{alice['id']}/notifications/read-all")
    assert result.json() == {"affected": 2}
    assert client.get(f"/sessions/{bob['id']}/notifications").json()["unread_count"] == 0

    cleared = client.delete(f"/sessions/{bob['id']}/notifications")
    assert cleared.json() == {"affected": 2}
    assert client.get(f"/sessions/{alice['id']}/notifications").json()["items"] == []


def test_issue_flow(client: TestClient) -> None:
    alice = _sign_up(client, "alice", "Sales")
    bob = _sign_up(client, "bob", "Logistics")

    issue = client.post(
        f"/sessions/{alice['id']}/issues",
        json={"department": "Logistics", "text": "Truck delayed", "severity": "urgent"},
    )
    assert issue.status_code == 201
    issue_id = issue.json()["id"]

    comment = client.post(
        f"/sessions/{alice['id']}/issues/{issue_id}/comments", json={"text": "@bob any news?"}
    )
    assert comment.status_code == 201
    assert client.post(
        f"/sessions/{alice['id']}/issues/unknown/comments", json={"text": "hi"}
    ).status_code == 404

    converted = client.post(f"/sessions/{alice['id']}/issues/{issue_id}/task")
    assert converted.status_code == 201
    assert converted.json()["assignee_name"] == "bob"

    issues = client.get(f"/sessions/{bob['id']}/issues").json()
    assert issues[0]["comments"][0]["text"] == "@bob any news?"


def test_presence_and_logout(client: TestClient) -> None:
    alice = _sign_up(client, "alice", "Sales")

    presence = client.get("/presence/").json()
    assert presence["online_count"] == 1
    assert presence["offline_count"] == 0

    assert client.delete(f"/sessions/{alice['id']}").status_code == 204
    assert client.get(f"/sessions/{alice['id']}").status_code == 404

    session = client.post("/sessions/", json={"employee_id": alice["user"]["id"]})
    assert session.status_code == 201
    assert session.json()["user"]["name"] == "alice"


def test_deleted_employee_disappears(client: TestClient) -> None:
    alice = _sign_up(client, "alice", "Sales")

    assert client.delete(f"/employees/{alice['user']['id']}").status_code == 204
    assert client.get("/employees/").json() == []
    assert client.delete(f"/employees/{alice['user']['id']}").status_code == 404


def test_assistant_without_api_key_is_unavailable(client: TestClient, monkeypatch) -> None:
    from ho_connect.config import Settings
    from ho_connect.infrastructure import openai_client

    monkeypatch.setattr(openai_client, "get_settings", lambda: Settings(openai_api_key=None))

    response = client.post("/assistant/ideas", json={"challenge": "Late deliveries"})

    assert response.status_code == 503


def test_websocket_streams_toasts(client: TestClient) -> None:
    alice = _sign_up(client, "alice", "Sales")
    bob = _sign_up(client, "bob", "Logistics")

    with client.websocket_connect(f"/sessions/{bob['id']}/ws") as websocket:
        assert websocket.receive_json() == {"type": "init", "data": []}

        client.post(f"/sessions/{alice['id']}/chat", json={"text": "@bob look"})

        events = [websocket.receive_json() for _ in range(2)]
        types = {event["type"] for event in events}
        assert types == {"sync", "toast.added"}
        added = next(event for event in events if event["type"] == "toast.added")
        assert added["data"]["targetUserId"] == bob["user"]["id"]

        websocket.send_json({"type": "ping"})
        # a second sync event from the activity counter write may precede the pong
        message = websocket.receive_json()
        while message["type"] != "pong":
            message = websocket.receive_json()
