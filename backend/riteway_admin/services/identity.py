"""Firebase Authentication adapter for driver identity accounts."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional

import firebase_admin
from firebase_admin import auth as firebase_auth, exceptions as firebase_exceptions
from google.auth import exceptions as google_auth_exceptions

from riteway_admin.core.logging import logger
from riteway_admin.models.drivers import IdentityRecord
from riteway_admin.services.record_store import StoreError


class IdentityNotFoundError(Exception):
    """Raised when no identity account exists for the requested uid."""

    def __init__(self, uid: str) -> None:
        super().__init__(f"User not found: {uid}")
        self.uid = uid


_AUTH_FAILURES = (firebase_exceptions.FirebaseError, google_auth_exceptions.GoogleAuthError)


@dataclass
class IdentityPage:
    records: List[IdentityRecord] = field(default_factory=list)
    next_token: Optional[str] = None


def _from_millis(value: Any) -> Optional[datetime]:
    if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
        return None
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def to_identity_record(user: Any) -> IdentityRecord:
    """Convert a ``firebase_admin.auth.UserRecord`` (or look-alike) into an IdentityRecord."""
    metadata = getattr(user, "user_metadata", None)
    return IdentityRecord(
        id=user.uid,
        email=getattr(user, "email", None),
        display_name=getattr(user, "display_name", None),
        phone_number=getattr(user, "phone_number", None),
        disabled=bool(getattr(user, "disabled", False)),
        created_at=_from_millis(getattr(metadata, "creation_timestamp", None)),
        last_sign_in_at=_from_millis(getattr(metadata, "last_sign_in_timestamp", None)),
    )


class IdentityAdapter:
    """Lookup, paged listing and deletion of Firebase Auth users."""

    def __init__(self, app: Optional[firebase_admin.App] = None) -> None:
        self._app = app

    def get_by_id(self, uid: str) -> IdentityRecord:
        try:
            user = firebase_auth.get_user(uid, app=self._app)
        except (firebase_auth.UserNotFoundError, ValueError) as exc:
            raise IdentityNotFoundError(uid) from exc
        except _AUTH_FAILURES as exc:
            logger.error("Identity lookup failed", uid=uid, error=str(exc))
            raise StoreError(f"Failed to fetch user '{uid}': {exc}") from exc
        return to_identity_record(user)

    def list_page(self, page_size: int, page_token: Optional[str] = None) -> IdentityPage:
        try:
            page = firebase_auth.list_users(page_token=page_token, max_results=page_size, app=self._app)
        except (ValueError, *_AUTH_FAILURES) as exc:
            logger.error("Identity listing failed", page_size=page_size, error=str(exc))
            raise StoreError(f"Failed to list users: {exc}") from exc
        return IdentityPage(
            records=[to_identity_record(user) for user in page.users],
            next_token=page.next_page_token or None,
        )

    def delete_by_id(self, uid: str) -> None:
        try:
            firebase_auth.delete_user(uid, app=self._app)
        except (firebase_auth.UserNotFoundError, ValueError) as exc:
            raise IdentityNotFoundError(uid) from exc
        except _AUTH_FAILURES as exc:
            logger.error("Identity deletion failed", uid=uid, error=str(exc))
            raise StoreError(f"Failed to delete user '{uid}': {exc}") from exc
