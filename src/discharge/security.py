from __future__ import annotations

import hashlib
from contextvars import ContextVar
from typing import List, Optional

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from src.discharge.config import settings

# Header read by get_api_key.
_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)

# Hash-derived identifier of the current caller, used by the audit logger so
# events can be correlated without exposing the raw key.
_current_subject: ContextVar[Optional[str]] = ContextVar("current_subject", default=None)


def get_current_subject() -> Optional[str]:
    return _current_subject.get()


def _parse_api_keys() -> List[str]:
    # API_KEYS is comma-separated; blanks are skipped.
    if not settings.api_keys:
        return []
    return [key.strip() for key in settings.api_keys.split(",") if key.strip()]


async def get_api_key(api_key: Optional[str] = Security(_api_key_header)) -> str:
    """Guard for the document endpoints.

    Open unless ENABLE_API_AUTH is set; then the X-API-Key header must carry
    one of API_KEYS. The caller is remembered by key hash only, so build
    audit events never hold the key itself.
    """

    if not settings.enable_api_auth:
        _current_subject.set(None)
        return ""

    allowed_keys = _parse_api_keys()
    if not allowed_keys:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API_KEYS is empty; no caller can be admitted.",
        )

    if api_key not in allowed_keys:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or missing API key.")

    digest = hashlib.sha256(api_key.encode("utf-8")).hexdigest()
    _current_subject.set(f"api-key:{digest[:16]}")
    return api_key
