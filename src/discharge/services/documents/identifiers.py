from __future__ import annotations

from typing import Callable
from uuid import uuid4

IdFactory = Callable[[], str]

URN_UUID_PREFIX = "urn:uuid:"


def next_id() -> str:
    """Return a fresh random (version 4) UUID in its canonical text form."""

    return str(uuid4())


def urn(resource_id: str) -> str:
    return f"{URN_UUID_PREFIX}{resource_id}"
