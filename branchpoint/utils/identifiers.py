"""Identifier and timestamp helpers for stored records"""
import uuid
from datetime import datetime, timezone


def new_id(prefix: str) -> str:
    """
    Generate an opaque record identifier.

    Example:
        new_id("dec") -> "dec_3f2b9c0e4a5d4e1f9b8a7c6d5e4f3a2b"
    """
    return f"{prefix}_{uuid.uuid4().hex}"


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string"""
    return datetime.now(timezone.utc).isoformat()
