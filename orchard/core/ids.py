"""
Opaque identifier generation for users and fruits.
"""

from __future__ import annotations

from typing import Container
from uuid import uuid4


def new_id(taken: Container[str] = ()) -> str:
    """Return a random 128-bit id (32 hex chars) not present in ``taken``."""
    candidate = uuid4().hex
    while candidate in taken:
        candidate = uuid4().hex
    return candidate
