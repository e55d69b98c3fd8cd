"""Unit tests for driver listing, lookup and deletion."""
from __future__ import annotations

import pytest

from conftest import FakeIdentityAdapter, FakeRecordStore, make_identity
from riteway_admin.services.driver_directory import DriverDirectory
from riteway_admin.services.identity import IdentityNotFoundError
from riteway_admin.services.record_store import StoreError


PURGE_PATHS = ("driverProfiles", "driverUploads", "scaleTickets", "ratings")


def _directory(identity, records=None, **kwargs) -> DriverDirectory:
    return DriverDirectory(identity, records or FakeRecordStore(), purge_paths=PURGE_PATHS, **kwargs)


def test_list_all_concatenates_token_chained_pages():
    pages = [
        [make_identity(f"uid-{page}-{index}") for index in range(size)]
        for page, size in enumerate([1000, 1000, 37])
    ]
    identity = FakeIdentityAdapter(pages=pages)

    users = _directory(identity).list_all()

    assert len(users) == 2037
    assert len({user.uid for user in users}) == 2037
    tokens = [call[2] for call in identity.calls if call[0] == "list_page"]
    assert tokens == [None, "page-1", "page-2"]


def test_iter_all_is_lazy_and_restartable():
    identity = FakeIdentityAdapter(pages=[[make_identity("a")], [make_identity("b")]])
    directory = _directory(identity)

    iterator = directory.iter_all()
    assert identity.calls == []
    assert next(iterator).uid == "a"
    assert len(identity.calls) == 1

    assert [user.uid for user in directory.iter_all()] == ["a", "b"]


def test_listing_keeps_absent_optional_fields_as_none():
    identity = FakeIdentityAdapter([make_identity("u1", "x@y.com"), make_identity("u2", display_name="")])

    first, second = _directory(identity).list_all()

    assert first.display_name is None
    assert first.phone_number is None
    assert second.email is None
    assert second.display_name == ""


def test_listing_failure_surfaces_store_error():
    identity = FakeIdentityAdapter([make_identity("u1")])
    identity.fail_with = StoreError("quota exceeded")

    with pytest.raises(StoreError):
        _directory(identity).list_all()


def test_delete_missing_driver_is_not_found():
    identity = FakeIdentityAdapter([make_identity("u1")])

    with pytest.raises(IdentityNotFoundError):
        _directory(identity).delete("ghost")


def test_delete_removes_identity_only(identity_adapter, record_store):
    directory = _directory(identity_adapter, record_store)

    directory.delete("drv-1")

    assert "drv-1" not in identity_adapter.users
    assert record_store.read_partition("scaleTickets", "drv-1")
    assert record_store.read_partition("ratings", "drv-1")
    assert not any(call[0] == "update" for call in record_store.calls)


def test_purge_records_removes_every_driver_partition(record_store):
    directory = _directory(FakeIdentityAdapter(), record_store)

    removed = directory.purge_records("drv-1")

    assert removed == ["driverProfiles/drv-1", "driverUploads/drv-1", "scaleTickets/drv-1", "ratings/drv-1"]
    assert record_store.read_partition("scaleTickets", "drv-1") == {}
    assert record_store.read_partition("ratings", "drv-1") == {}
    assert record_store.read_node("driverProfiles/drv-1") is None


def test_get_with_profile_returns_identity_and_profile(identity_adapter, record_store):
    identity, profile = _directory(identity_adapter, record_store).get_with_profile("drv-1")

    assert identity.uid == "drv-1"
    assert profile == {"truck": "T-800", "licenseState": "FL"}

    _, missing = _directory(identity_adapter, record_store).get_with_profile("drv-2")
    assert missing is None


def test_uid_with_path_characters_has_no_profile_and_nothing_to_purge():
    identity = FakeIdentityAdapter([make_identity("org/drv-7", "seven@b.com")])
    records = FakeRecordStore({"driverProfiles/org": {"drv-7": {"truck": "T-7"}}})
    directory = _directory(identity, records)

    summary, profile = directory.get_with_profile("org/drv-7")

    assert summary.uid == "org/drv-7"
    assert profile is None
    assert directory.purge_records("org/drv-7") == []
    assert records.calls == []
