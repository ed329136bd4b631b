"""Identity gate.

A caller proves who they are by presenting a user id, taken from the
``user_id`` path parameter or, failing that, the ``user_id`` field of the
JSON body. The id is a bearer capability: after login no secret is checked,
only that the referenced user exists.
"""

import logging
from typing import Any, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from . import models
from .database import get_db
from .errors import Unauthenticated

logger = logging.getLogger(__name__)

IDENTITY_FIELD = "user_id"


def claimed_identity(path_value: Optional[str], body_value: Any) -> Optional[str]:
    """Pick the identity token the caller presented; the path wins over the body."""
    for value in (path_value, body_value):
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def resolve_identity(db: Session, token: Optional[str]) -> models.User:
    """Return the user the token refers to or raise Unauthenticated.

    An unknown id gets the same message as a missing one so the resource
    routes never reveal which ids exist.
    """
    if not token:
        raise Unauthenticated("Authentication required")

    user = db.query(models.User).filter(models.User.id == token).first()
    if user is None:
        logger.warning("Rejected request for unknown user id=%s", token)
        raise Unauthenticated("Authentication required")
    return user


async def _body_identity(request: Request) -> Any:
    if not await request.body():
        return None
    try:
        payload = await request.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        return payload.get(IDENTITY_FIELD)
    return None


async def authenticate_user(request: Request, db: Session = Depends(get_db)) -> models.User:
    """Dependency: resolve the caller and attach it to ``request.state.user``."""
    path_value = request.path_params.get(IDENTITY_FIELD)
    body_value = None if path_value else await _body_identity(request)

    user = await run_in_threadpool(resolve_identity, db, claimed_identity(path_value, body_value))
    request.state.user = user
    return user
