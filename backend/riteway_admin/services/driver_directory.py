"""Driver account listing, lookup and deletion."""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Sequence

from riteway_admin.core.logging import logger
from riteway_admin.models.drivers import IdentitySummary
from riteway_admin.services.identity import IdentityAdapter
from riteway_admin.services.projections import summarize_identity
from riteway_admin.services.record_store import RecordStore, StoreError, is_storable_key, partition_path


class DriverDirectory:
    """Operations over the full set of driver identity accounts."""

    def __init__(
        self,
        identity: IdentityAdapter,
        records: RecordStore,
        *,
        page_size: int = 1000,
        profiles_path: str = "driverProfiles",
        purge_paths: Sequence[str] = (),
    ) -> None:
        self._identity = identity
        self._records = records
        self._page_size = page_size
        self._profiles_path = profiles_path
        self._purge_paths = tuple(purge_paths)

    def iter_all(self) -> Iterator[IdentitySummary]:
        """Yield every identity, one adapter page at a time.

        Pages are requested strictly in sequence; a continuation token is
        only valid against the page that returned it. Each call starts over
        from the first page. Order is whatever the adapter returns.
        """
        token: Optional[str] = None
        while True:
            page = self._identity.list_page(self._page_size, token)
            for record in page.records:
                yield summarize_identity(record)
            if not page.next_token:
                return
            token = page.next_token

    def list_all(self) -> List[IdentitySummary]:
        return list(self.iter_all())

    def get_with_profile(self, uid: str) -> tuple[IdentitySummary, Optional[Dict[str, Any]]]:
        """Identity summary plus the driver's raw profile node, if one exists."""
        identity = summarize_identity(self._identity.get_by_id(uid))
        if not is_storable_key(uid):
            return identity, None
        path = partition_path(self._profiles_path, uid)
        profile = self._records.read_node(path)
        if profile is not None and not isinstance(profile, dict):
            raise StoreError(f"Malformed profile at '{path}': expected an object")
        return identity, profile

    def delete(self, uid: str) -> None:
        """Delete the identity account only.

        Profile, upload, ticket and rating partitions are left in place;
        use ``purge_records`` to remove them explicitly.
        """
        self._identity.delete_by_id(uid)
        logger.info("Driver identity deleted", uid=uid)

    def purge_records(self, uid: str) -> List[str]:
        """Remove the driver's per-driver partitions in one multi-path write."""
        if not is_storable_key(uid):
            return []
        paths = [partition_path(collection, uid) for collection in self._purge_paths]
        self._records.update({path: None for path in paths})
        logger.info("Driver records purged", uid=uid, paths=paths)
        return paths
