# tests/test_auth.py

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from taskboard import crud
from taskboard.auth import claimed_identity, resolve_identity
from taskboard.errors import Unauthenticated


@pytest.mark.parametrize(
    ("path_value", "body_value", "expected"),
    [
        ("from-path", "from-body", "from-path"),
        (None, "from-body", "from-body"),
        ("", "from-body", "from-body"),
        ("   ", "from-body", "from-body"),
        (None, 42, None),
        (None, {"id": "x"}, None),
        (None, None, None),
        (" padded ", None, "padded"),
    ],
)
def test_claimed_identity(path_value, body_value, expected) -> None:
    assert claimed_identity(path_value, body_value) == expected


def test_resolve_identity_returns_user(db: Session) -> None:
    user = crud.create_user(db, "alice", "alice@mail.com", "pw")
    assert resolve_identity(db, user.id).id == user.id


@pytest.mark.parametrize("token", [None, "", "unknown-id"])
def test_resolve_identity_rejects_with_same_message(db: Session, token) -> None:
    with pytest.raises(Unauthenticated) as err:
        resolve_identity(db, token)
    assert err.value.message == "Authentication required"
