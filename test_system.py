#!/usr/bin/env python3
"""Smoke checks against a running Riteway Admin API."""

import os
import sys

import pytest
import requests

pytestmark = pytest.mark.skip(reason="Integration script. Run directly with: python test_system.py")

BASE_URL = os.environ.get("RITEWAY_ADMIN_URL", "http://localhost:8080").rstrip("/")
API_KEY = os.environ.get("ADMIN_API_KEY", "")


def _headers():
    return {"X-Admin-Api-Key": API_KEY}


def test_health():
    """Root and health endpoints answer without a key."""
    try:
        root = requests.get(f"{BASE_URL}/", timeout=5)
        health = requests.get(f"{BASE_URL}/health", timeout=5)
    except requests.RequestException as e:
        print(f"❌ Server not responding: {e}")
        return False
    if root.status_code == 200 and health.status_code == 200:
        print(f"✅ Server is healthy: {health.json()}")
        return True
    print(f"❌ Health check failed: {root.status_code} / {health.status_code}")
    return False


def test_auth_gate():
    """Admin routes refuse requests without the key."""
    resp = requests.get(f"{BASE_URL}/drivers", timeout=10)
    if resp.status_code == 401:
        print("✅ /drivers rejects missing key")
        return True
    print(f"❌ Expected 401 without key, got {resp.status_code}")
    return False


def list_drivers():
    resp = requests.get(f"{BASE_URL}/drivers", headers=_headers(), timeout=60)
    if resp.status_code != 200:
        print(f"❌ Listing failed: {resp.status_code} {resp.text[:300]}")
        return []
    payload = resp.json()
    print(f"✅ Listed {payload['count']} drivers")
    return payload["users"]


def show_driver_details(uid):
    resp = requests.get(f"{BASE_URL}/driver-details", params={"uid": uid}, headers=_headers(), timeout=60)
    if resp.status_code != 200:
        print(f"❌ Details failed for {uid}: {resp.status_code} {resp.text[:300]}")
        return None
    summary = resp.json()
    stats = summary["stats"]
    print(
        f"✅ {uid}: loads={stats['totalLoads']} tickets={stats['totalTickets']} "
        f"ratings={stats['totalRatings']} avg={stats['avgRating']}"
    )
    return summary


def main():
    print("=" * 60)
    print("Riteway Admin API smoke test")
    print("=" * 60)

    if not test_health():
        print("\nStart the server with: riteway-admin-api")
        sys.exit(1)

    if not API_KEY:
        print("\nSet ADMIN_API_KEY to exercise the admin routes")
        sys.exit(1)

    test_auth_gate()

    drivers = list_drivers()
    for user in drivers[:3]:
        show_driver_details(user["uid"])

    missing = requests.get(f"{BASE_URL}/driver-details", params={"uid": "__missing__"}, headers=_headers(), timeout=30)
    print(f"{'✅' if missing.status_code == 404 else '❌'} unknown uid -> {missing.status_code}")


if __name__ == "__main__":
    main()
