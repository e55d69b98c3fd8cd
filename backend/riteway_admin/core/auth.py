"""Shared-secret gate for the admin routes."""
from __future__ import annotations

import hmac
from dataclasses import dataclass

from fastapi import Header, HTTPException, Query, status

from riteway_admin.core.config import get_settings
from riteway_admin.core.logging import logger


@dataclass
class AdminContext:
    actor: str
    source: str


def _first_present(*candidates: tuple[str, str | None]) -> tuple[str, str] | None:
    for source, value in candidates:
        if value and value.strip():
            return source, value.strip()
    return None


def require_admin_key(
    x_admin_api_key: str | None = Header(default=None, alias="X-Admin-Api-Key"),
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    api_key: str | None = Query(default=None),
) -> AdminContext:
    """Accept the admin key from either header or the ``api_key`` query parameter."""
    settings = get_settings()
    supplied = _first_present(
        ("header:X-Admin-Api-Key", x_admin_api_key),
        ("header:X-API-Key", x_api_key),
        ("query:api_key", api_key),
    )
    if supplied is None:
        logger.warning("Rejected admin request without API key")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    source, key = supplied
    if not hmac.compare_digest(key.encode("utf-8"), settings.admin_api_key.encode("utf-8")):
        logger.warning("Rejected admin request with invalid API key", source=source)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    return AdminContext(actor="admin-key", source=source)
