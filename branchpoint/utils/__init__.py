"""Shared utility functions and helpers"""
from branchpoint.utils.identifiers import new_id, utc_now_iso

__all__ = [
    "new_id",
    "utc_now_iso",
]
