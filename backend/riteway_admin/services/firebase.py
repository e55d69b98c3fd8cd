"""Firebase Admin bootstrap: one named app per process, built from Settings."""
from __future__ import annotations

from dataclasses import dataclass

import firebase_admin
from firebase_admin import credentials

from riteway_admin.core.config import Settings
from riteway_admin.core.logging import logger
from riteway_admin.services.identity import IdentityAdapter
from riteway_admin.services.record_store import RecordStore


FIREBASE_APP_NAME = "riteway-admin"


@dataclass(frozen=True)
class FirebaseBackend:
    app: firebase_admin.App
    identity: IdentityAdapter
    records: RecordStore


def initialize_firebase(settings: Settings) -> FirebaseBackend:
    try:
        app = firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        certificate = credentials.Certificate(settings.service_account_info())
        app = firebase_admin.initialize_app(
            certificate,
            {"databaseURL": settings.fb_database_url, "projectId": settings.fb_project_id},
            name=FIREBASE_APP_NAME,
        )
        logger.info(
            "Firebase app initialised",
            project_id=settings.fb_project_id,
            database_url=settings.fb_database_url,
        )
    return FirebaseBackend(app=app, identity=IdentityAdapter(app), records=RecordStore(app))


def shutdown_firebase(backend: FirebaseBackend) -> None:
    firebase_admin.delete_app(backend.app)
