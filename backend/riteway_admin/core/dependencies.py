"""FastAPI dependencies wiring the Firebase adapters into the services."""
from fastapi import Depends, Request

from riteway_admin.core.config import Settings, get_settings
from riteway_admin.services.driver_details import DriverAggregator
from riteway_admin.services.driver_directory import DriverDirectory
from riteway_admin.services.identity import IdentityAdapter
from riteway_admin.services.record_store import RecordStore


def get_identity_adapter(request: Request) -> IdentityAdapter:
    return request.app.state.firebase.identity


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.firebase.records


def get_driver_directory(
    identity: IdentityAdapter = Depends(get_identity_adapter),
    records: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
) -> DriverDirectory:
    return DriverDirectory(
        identity,
        records,
        page_size=settings.identity_page_size,
        profiles_path=settings.driver_profiles_path,
        purge_paths=(
            settings.driver_profiles_path,
            settings.driver_uploads_path,
            settings.scale_tickets_path,
            settings.ratings_path,
        ),
    )


def get_driver_aggregator(
    identity: IdentityAdapter = Depends(get_identity_adapter),
    records: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_settings),
) -> DriverAggregator:
    return DriverAggregator(
        identity,
        records,
        deliveries_path=settings.deliveries_path,
        tickets_path=settings.scale_tickets_path,
        ratings_path=settings.ratings_path,
    )
