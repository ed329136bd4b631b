"""HTTP client for the taskboard API.

Holds the logged-in user id, the task list loaded from the server and the
current view filters. Local state changes only after the server has
confirmed the corresponding request.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from .filters import ViewState, derive_categories, filter_tasks
from .schemas import Task

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return fallback


class TaskBoardClient:
    def __init__(
        self,
        base_url: str = "http://127.0.0.1:5000",
        *,
        http: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)
        self.user_id: str | None = None
        self.tasks: list[Task] = []
        self.view = ViewState()

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> TaskBoardClient:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ---- auth ----

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def login(self, email: str, password: str) -> str:
        resp = self._http.post("/api/users/login", json={"email": email, "password": password})
        if resp.status_code == 401:
            raise ApiError(401, "Incorrect password")
        if resp.status_code == 404:
            raise ApiError(404, "User not found. Please register first.")
        if resp.status_code != 200:
            raise ApiError(resp.status_code, _message(resp, "Login failed"))

        self.user_id = resp.json()["user_id"]
        logger.info("Logged in as %s", self.user_id)
        return self.user_id

    def register(self, email: str, password: str) -> str:
        """Register with the email's local part as username, then log in."""
        resp = self._http.post(
            "/api/users/register",
            json={"username": email.split("@")[0], "email": email, "password": password},
        )
        if resp.status_code == 409:
            raise ApiError(409, "User already exists")
        if resp.status_code != 201:
            raise ApiError(resp.status_code, _message(resp, "Registration failed"))
        return self.login(email, password)

    def logout(self) -> None:
        self.user_id = None
        self.tasks = []
        self.view = ViewState()

    def _require_user(self) -> str:
        if self.user_id is None:
            raise ApiError(401, "You must be logged in")
        return self.user_id

    # ---- tasks ----

    def refresh(self) -> list[Task]:
        user_id = self._require_user()
        resp = self._http.get(f"/api/todos/{user_id}")
        if resp.status_code == 401:
            self.logout()
            raise ApiError(401, _message(resp, "Authentication required"))
        if resp.status_code != 200:
            raise ApiError(resp.status_code, _message(resp, "Failed to load todos"))

        self.tasks = [Task.model_validate(item) for item in resp.json()]
        return self.tasks

    def add_task(
        self,
        title: str,
        *,
        category: str | None = None,
        priority: str | None = None,
        due_date: date | None = None,
        notes: str | None = None,
    ) -> Task:
        user_id = self._require_user()
        if not title.strip():
            raise ApiError(400, "Task title is required")

        payload = {
            "user_id": user_id,
            "title": title.strip(),
            "category": category or "personal",
            "priority": priority or "medium",
            "due_date": due_date.isoformat() if due_date else None,
            "notes": (notes or "").strip(),
        }
        resp = self._http.post("/api/todos", json=payload)
        if resp.status_code != 201:
            raise ApiError(resp.status_code, f"Failed to add todo: {_message(resp, 'Unknown error occurred')}")

        task = Task.model_validate(resp.json())
        self.tasks = [task, *self.tasks]
        return task

    def toggle_task(self, task_id: str) -> bool:
        user_id = self._require_user()
        resp = self._http.patch(f"/api/todos/{task_id}/toggle", json={"user_id": user_id})
        if resp.status_code != 200:
            raise ApiError(resp.status_code, _message(resp, "Failed to update todo status"))

        completed = bool(resp.json()["completed"])
        self.tasks = [
            t.model_copy(update={"completed": completed}) if t.id == task_id else t
            for t in self.tasks
        ]
        return completed

    def delete_task(self, task_id: str) -> None:
        user_id = self._require_user()
        resp = self._http.request("DELETE", f"/api/todos/{task_id}", json={"user_id": user_id})
        if resp.status_code != 200:
            raise ApiError(resp.status_code, _message(resp, "Failed to delete todo"))

        self.tasks = [t for t in self.tasks if t.id != task_id]

    def edit_task(self, task_id: str, **fields: Any) -> Task:
        user_id = self._require_user()
        if isinstance(fields.get("due_date"), date):
            fields["due_date"] = fields["due_date"].isoformat()

        resp = self._http.put(f"/api/todos/{task_id}", json={"user_id": user_id, **fields})
        if resp.status_code != 200:
            raise ApiError(resp.status_code, _message(resp, "Failed to update todo"))

        updated = Task.model_validate(resp.json())
        self.tasks = [updated if t.id == task_id else t for t in self.tasks]
        return updated

    # ---- view ----

    def set_view(self, *, status: str | None = None, search: str | None = None, category: str | None = None) -> ViewState:
        self.view = ViewState(
            status=self.view.status if status is None else status,
            search=self.view.search if search is None else search,
            category=self.view.category if category is None else category,
        )
        return self.view

    def visible_tasks(self) -> list[Task]:
        return filter_tasks(self.tasks, self.view)

    def categories(self) -> list[str]:
        return derive_categories(self.tasks)
