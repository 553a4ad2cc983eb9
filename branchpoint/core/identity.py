"""Caller identity resolution.

The demo client identifies itself with an ``x-user-id`` header. When the
header is absent a fresh pseudo-identity is generated, so an anonymous
caller never sees anyone else's decisions. This is not authentication;
the resolved value is passed to the services as an opaque owner id.
"""
import logging
from typing import Optional
from uuid import uuid4

from fastapi import Header

logger = logging.getLogger(__name__)

USER_ID_HEADER = "x-user-id"


def generate_pseudo_user_id() -> str:
    """Generate a throwaway identity for callers without a user header"""
    return f"user_{uuid4().hex}"


def resolve_user_id(header_value: Optional[str]) -> str:
    """Return the caller's user id, falling back to a pseudo-identity"""
    if header_value and header_value.strip():
        return header_value.strip()

    user_id = generate_pseudo_user_id()
    logger.debug(f"No {USER_ID_HEADER} header; using pseudo-identity {user_id}")
    return user_id


async def get_current_user_id(
    x_user_id: Optional[str] = Header(None, alias=USER_ID_HEADER),
) -> str:
    """FastAPI dependency resolving the caller identity"""
    return resolve_user_id(x_user_id)
