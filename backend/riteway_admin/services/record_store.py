"""Realtime Database adapter for deliveries, scale tickets, ratings and profiles."""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

import firebase_admin
from firebase_admin import db, exceptions as firebase_exceptions
from google.auth import exceptions as google_auth_exceptions

from riteway_admin.core.logging import logger


class StoreError(Exception):
    """Raised when an external store read/write fails or returns malformed data."""


_STORE_FAILURES = (
    firebase_exceptions.FirebaseError,
    google_auth_exceptions.GoogleAuthError,
    ValueError,
)


class RecordStore:
    """Key-value access to collections and per-driver partitions.

    A collection read always yields ``{record_id: record}``; a missing node
    reads as an empty mapping.
    """

    def __init__(self, app: Optional[firebase_admin.App] = None) -> None:
        self._app = app

    def read_node(self, path: str) -> Any:
        """Return the raw value at ``path`` (``None`` when the node is absent)."""
        try:
            return db.reference(path, app=self._app).get()
        except _STORE_FAILURES as exc:
            logger.error("Realtime Database read failed", path=path, error=str(exc))
            raise StoreError(f"Failed to read '{path}': {exc}") from exc

    def read_all(self, collection_path: str) -> Dict[str, Dict[str, Any]]:
        return normalize_collection(collection_path, self.read_node(collection_path))

    def read_partition(self, collection_path: str, partition_key: str) -> Dict[str, Dict[str, Any]]:
        """Records under ``collection_path/partition_key``.

        A key the database could never store has no partition, so it reads
        as empty without a round trip.
        """
        if not is_storable_key(partition_key):
            return {}
        return self.read_all(partition_path(collection_path, partition_key))

    def update(self, values: Dict[str, Any]) -> None:
        """Multi-path write from the root; a ``None`` value deletes that path."""
        if not values:
            return
        try:
            db.reference("/", app=self._app).update(values)
        except _STORE_FAILURES as exc:
            logger.error("Realtime Database update failed", paths=sorted(values), error=str(exc))
            raise StoreError(f"Failed to update {sorted(values)}: {exc}") from exc


_UNSTORABLE_KEY = re.compile(r"[.$#\[\]/\x00-\x1f\x7f]")


def is_storable_key(key: Any) -> bool:
    """True when ``key`` is a valid single Realtime Database path segment."""
    return isinstance(key, str) and bool(key) and not _UNSTORABLE_KEY.search(key)


def partition_path(collection_path: str, partition_key: str) -> str:
    key = str(partition_key or "")
    if not is_storable_key(key):
        raise StoreError(f"Invalid partition key {partition_key!r} for '{collection_path}'")
    return f"{collection_path.rstrip('/')}/{key}"


def normalize_collection(path: str, value: Any) -> Dict[str, Dict[str, Any]]:
    """Coerce a raw collection node into ``{record_id: record}``.

    The Realtime Database returns integer-keyed children as a list with
    ``None`` holes; those are accepted and re-keyed by index.
    """
    if value is None:
        return {}

    if isinstance(value, dict):
        items = [(str(key), record) for key, record in value.items()]
    elif isinstance(value, list):
        items = [(str(index), record) for index, record in enumerate(value) if record is not None]
    else:
        raise StoreError(f"Malformed collection at '{path}': expected an object, got {type(value).__name__}")

    records: Dict[str, Dict[str, Any]] = {}
    skipped: List[str] = []
    for key, record in items:
        if not isinstance(record, dict):
            skipped.append(key)
            continue
        records[key] = record

    if skipped:
        logger.warning("Skipped non-object records", path=path, keys=skipped[:10], skipped=len(skipped))
    return records
