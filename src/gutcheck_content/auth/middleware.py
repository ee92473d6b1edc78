"""Role extraction from the session and role guards for admin routes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import HTTPException, Request, status

from gutcheck_content.models.resolution import UserRole

if TYPE_CHECKING:
    from collections.abc import Callable


def get_user(request: Request) -> dict[str, Any] | None:
    """Extract the signed-in user from the session, if present."""
    return request.session.get("user") if hasattr(request, "session") else None


def get_user_role(request: Request) -> UserRole | None:
    """Return the session user's role; unknown or missing roles are None."""
    user = get_user(request)
    if not user:
        return None
    try:
        return UserRole(user.get("role"))
    except ValueError:
        return None


def require_authenticated_user(request: Request) -> dict[str, Any]:
    """Return the signed-in user or raise HTTP 401."""
    user = get_user(request)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user


def require_role(*roles: UserRole) -> Callable[[Request], dict[str, Any]]:
    """Build a dependency that admits only users holding one of ``roles``."""

    def dependency(request: Request) -> dict[str, Any]:
        user = require_authenticated_user(request)
        if get_user_role(request) not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {', '.join(role.value for role in roles)}",
            )
        return user

    return dependency
