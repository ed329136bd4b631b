"""Projection of a task list onto what the user currently wants to see.

Everything here is pure: it works on any objects exposing ``title``,
``category`` and ``completed`` (ORM rows, response schemas, client copies)
and never mutates its input.
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence, TypeVar

T = TypeVar("T")

ALL = "all"
STATUSES = ("all", "active", "completed")
DEFAULT_CATEGORIES = ("all", "work", "personal", "shopping")


@dataclass(frozen=True)
class ViewState:
    status: str = ALL
    search: str = ""
    category: str = ALL


def matches_status(task, status: str) -> bool:
    if status == "active":
        return not task.completed
    if status == "completed":
        return bool(task.completed)
    if status == ALL:
        return True
    raise ValueError(f"Unknown status filter: {status!r}")


def matches_search(task, search: str) -> bool:
    """Case-insensitive substring match on title or category."""
    if not search:
        return True
    needle = search.lower()
    return needle in (task.title or "").lower() or needle in (task.category or "").lower()


def matches_category(task, category: str) -> bool:
    return category == ALL or task.category == category


def filter_tasks(tasks: Iterable[T], view: ViewState) -> List[T]:
    if view.status not in STATUSES:
        raise ValueError(f"Unknown status filter: {view.status!r}")
    return [
        t
        for t in tasks
        if matches_status(t, view.status)
        and matches_search(t, view.search)
        and matches_category(t, view.category)
    ]


def derive_categories(tasks: Iterable, baseline: Sequence[str] = DEFAULT_CATEGORIES) -> List[str]:
    """Baseline categories plus those in use, first occurrence wins, "all" first."""
    seen = {}
    for name in (ALL, *baseline, *(t.category for t in tasks)):
        if name not in seen:
            seen[name] = None
    return list(seen)
