"""Session-based role checks; sign-in itself happens upstream."""

from gutcheck_content.auth.middleware import get_user, get_user_role, require_authenticated_user, require_role

__all__ = ["get_user", "get_user_role", "require_authenticated_user", "require_role"]
