"""User identity dependency for tracker endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Header, Request

from health_tracker.config import parse_allowed_user_ids
from health_tracker.errors import UnauthorizedError

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer

USER_HEADER = "X-User-Id"


def _get_allowed_user_ids(request: Request) -> set[str] | None:
    container: AppContainer = request.app.state.container
    return parse_allowed_user_ids(container.settings.allowed_user_ids)


async def require_user(
    x_user_id: str | None = Header(default=None),
    allowed: set[str] | None = Depends(_get_allowed_user_ids),
) -> str:
    """Return the caller's user id from the identity header.

    The id is opaque and trusted as already authenticated upstream.
    """
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise UnauthorizedError(f"Missing {USER_HEADER} header")
    if allowed is not None and user_id not in allowed:
        raise UnauthorizedError("User is not allowed")
    return user_id
