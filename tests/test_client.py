# tests/test_client.py

from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from taskboard.client import ApiError, TaskBoardClient


@pytest.fixture()
def board(client: TestClient) -> TaskBoardClient:
    return TaskBoardClient(http=client)


def test_register_logs_in_with_email_local_part(board: TaskBoardClient, client: TestClient) -> None:
    user_id = board.register("erin@mail.com", "pw")

    assert board.is_authenticated
    assert board.user_id == user_id
    resp = client.post("/api/users/login", json={"email": "erin@mail.com", "password": "pw"})
    assert resp.json()["username"] == "erin"


def test_register_twice_reports_existing_user(board: TaskBoardClient) -> None:
    board.register("erin@mail.com", "pw")
    with pytest.raises(ApiError) as err:
        board.register("erin@mail.com", "pw")
    assert err.value.status_code == 409
    assert err.value.message == "User already exists"


def test_login_error_messages(board: TaskBoardClient) -> None:
    with pytest.raises(ApiError) as err:
        board.login("ghost@mail.com", "pw")
    assert err.value.message == "User not found. Please register first."

    board.register("erin@mail.com", "pw")
    board.logout()
    with pytest.raises(ApiError) as err:
        board.login("erin@mail.com", "bad")
    assert err.value.message == "Incorrect password"
    assert not board.is_authenticated


def test_local_state_follows_server(board: TaskBoardClient) -> None:
    board.register("erin@mail.com", "pw")

    milk = board.add_task("Buy milk", category="shopping")
    report = board.add_task("Ship report", category="work", priority="high", due_date=date(2026, 11, 2))
    assert [t.title for t in board.tasks] == ["Ship report", "Buy milk"]

    assert board.toggle_task(report.id) is True
    board.set_view(status="active")
    assert [t.title for t in board.visible_tasks()] == ["Buy milk"]

    board.set_view(status="all", search="ship")
    assert [t.title for t in board.visible_tasks()] == ["Ship report"]

    board.delete_task(milk.id)
    assert [t.id for t in board.tasks] == [report.id]

    # A fresh load agrees with the local copy.
    board.refresh()
    assert [(t.id, t.completed) for t in board.tasks] == [(report.id, True)]


def test_edit_is_persisted(board: TaskBoardClient) -> None:
    board.register("erin@mail.com", "pw")
    task = board.add_task("draft")

    board.edit_task(task.id, title="final", category="health", due_date=date(2026, 12, 1))
    assert board.tasks[0].title == "final"

    board.refresh()
    assert board.tasks[0].title == "final"
    assert board.tasks[0].due_date == date(2026, 12, 1)
    assert board.categories() == ["all", "work", "personal", "shopping", "health"]


def test_failed_delete_keeps_local_list(board: TaskBoardClient) -> None:
    board.register("erin@mail.com", "pw")
    board.add_task("keep")

    with pytest.raises(ApiError) as err:
        board.delete_task("missing")
    assert err.value.status_code == 404
    assert [t.title for t in board.tasks] == ["keep"]


def test_blank_title_is_rejected_before_request(board: TaskBoardClient) -> None:
    board.register("erin@mail.com", "pw")
    with pytest.raises(ApiError):
        board.add_task("   ")
    assert board.tasks == []


def test_unknown_user_is_logged_out_on_refresh(board: TaskBoardClient) -> None:
    board.user_id = "stale-id"
    with pytest.raises(ApiError) as err:
        board.refresh()
    assert err.value.status_code == 401
    assert not board.is_authenticated
