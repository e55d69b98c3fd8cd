"""API routes for driver accounts and driver detail aggregation."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from riteway_admin.core.auth import AdminContext, require_admin_key
from riteway_admin.core.dependencies import get_driver_aggregator, get_driver_directory
from riteway_admin.core.logging import logger
from riteway_admin.models.drivers import (
    DeleteDriverResponse,
    DriverListResponse,
    DriverProfileResponse,
    DriverSummary,
    PurgeDriverRecordsResponse,
)
from riteway_admin.services.driver_details import DriverAggregator
from riteway_admin.services.driver_directory import DriverDirectory
from riteway_admin.services.identity import IdentityNotFoundError
from riteway_admin.services.record_store import StoreError

router = APIRouter(tags=["drivers"])


def _store_failure(message: str, exc: StoreError, **context) -> HTTPException:
    logger.error(message, error=str(exc), **context)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("/drivers", response_model=DriverListResponse)
def list_drivers(
    context: AdminContext = Depends(require_admin_key),
    directory: DriverDirectory = Depends(get_driver_directory),
):
    try:
        users = directory.list_all()
    except StoreError as exc:
        raise _store_failure("Failed to list drivers", exc)
    return DriverListResponse(count=len(users), users=users)


@router.get("/drivers/{uid}", response_model=DriverProfileResponse)
def get_driver(
    uid: str,
    context: AdminContext = Depends(require_admin_key),
    directory: DriverDirectory = Depends(get_driver_directory),
):
    try:
        identity, profile = directory.get_with_profile(uid)
    except IdentityNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    except StoreError as exc:
        raise _store_failure("Failed to fetch driver", exc, uid=uid)
    return DriverProfileResponse(auth=identity, profile=profile)


@router.delete("/drivers/{uid}", response_model=DeleteDriverResponse)
def delete_driver(
    uid: str,
    context: AdminContext = Depends(require_admin_key),
    directory: DriverDirectory = Depends(get_driver_directory),
):
    try:
        directory.delete(uid)
    except IdentityNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    except StoreError as exc:
        raise _store_failure("Failed to delete driver", exc, uid=uid)
    return DeleteDriverResponse(uid=uid)


@router.delete("/drivers/{uid}/records", response_model=PurgeDriverRecordsResponse)
def purge_driver_records(
    uid: str,
    context: AdminContext = Depends(require_admin_key),
    directory: DriverDirectory = Depends(get_driver_directory),
):
    try:
        removed = directory.purge_records(uid)
    except StoreError as exc:
        raise _store_failure("Failed to purge driver records", exc, uid=uid)
    return PurgeDriverRecordsResponse(uid=uid, removed=removed)


@router.get("/driver-details", response_model=DriverSummary)
async def get_driver_details(
    uid: str | None = Query(default=None),
    context: AdminContext = Depends(require_admin_key),
    aggregator: DriverAggregator = Depends(get_driver_aggregator),
) -> DriverSummary:
    """Identity, assigned loads, scale tickets, ratings and stats for one driver."""
    driver_id = (uid or "").strip()
    if not driver_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing uid")
    try:
        return await aggregator.aggregate(driver_id)
    except IdentityNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    except StoreError as exc:
        raise _store_failure("Failed to aggregate driver details", exc, uid=driver_id)
