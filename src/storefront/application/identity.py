"""Caller identity check shared by every user-scoped use case.

Credential verification happens upstream; by the time a handler runs it
only needs an opaque, already-verified user id.
"""

from __future__ import annotations

from storefront.domain.exceptions import UnauthenticatedError


def require_user(user_id: str | None) -> str:
    if user_id is None or not str(user_id).strip():
        raise UnauthenticatedError("Authentication required")
    return str(user_id).strip()
