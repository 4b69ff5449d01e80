"""Shared FastAPI dependencies."""

import uuid

from fastapi import Header


async def get_actor_id(x_user_id: uuid.UUID = Header(..., alias="X-User-ID")) -> uuid.UUID:
    """Authenticated actor, as forwarded by the auth middleware."""
    return x_user_id


__all__ = ["get_actor_id"]
