"""Pydantic models for driver identities, deliveries, scale tickets and ratings.

Two layers live here. ``Raw*`` models describe records as they sit in the
Realtime Database: every field optional and untyped, since the mobile app
writes them loosely. The remaining models are the shapes this API returns;
every field is filled in, and the projection in
``riteway_admin.services.projections`` is the only place that converts one
into the other.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


Timestamp = int | float | str | None


class ApiModel(BaseModel):
    """Base for response models: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RawRecord(BaseModel):
    """Base for loosely-shaped records read from the Realtime Database."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class DeliveryStatus(str, Enum):
    """Lifecycle status of a delivery (load)."""
    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# --- Identity (Firebase Auth) ---

class IdentityRecord(BaseModel):
    """An identity account as returned by the identity adapter."""
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    phone_number: Optional[str] = None
    disabled: bool = False
    created_at: Optional[datetime] = None
    last_sign_in_at: Optional[datetime] = None


class IdentitySummary(ApiModel):
    """Stable listing shape for one identity account.

    ``display_name`` and ``phone_number`` stay ``None`` when unset so callers
    can tell "no name" apart from an empty name.
    """
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    phone_number: Optional[str] = None
    disabled: bool = False
    created_at: Optional[datetime] = None
    last_sign_in_at: Optional[datetime] = None


# --- Raw Realtime Database records ---

class RawDeliveryDetails(RawRecord):
    customer_name: Any = None
    address: Any = None
    items: Any = None
    yards_delivered: Any = None
    revenue: Any = None
    profit: Any = None
    assigned_driver_email: Any = None
    assigned_driver_id: Any = None


class RawDelivery(RawRecord):
    status: Any = None
    details: RawDeliveryDetails = Field(default_factory=RawDeliveryDetails)
    created_at: Any = None

    @field_validator("details", mode="before")
    @classmethod
    def _details_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}


class RawScaleTicket(RawRecord):
    url: Any = None
    file_name: Any = None
    uploaded_at: Any = None
    load_id: Any = None


class RawRating(RawRecord):
    rating: Any = None
    comment: Any = None
    customer_name: Any = None
    load_id: Any = None
    created_at: Any = None


# --- Driver summary (derived per request) ---

class LoadSummary(ApiModel):
    """A delivery assigned to the driver, with optional fields defaulted."""
    id: str
    status: str = ""
    customer_name: str = ""
    address: str = ""
    items: str = ""
    yards_delivered: float = 0
    revenue: float = 0
    profit: float = 0
    assigned_driver_email: str = ""
    assigned_driver_id: str = ""
    created_at: Timestamp = None


class ScaleTicket(ApiModel):
    id: str
    url: str = ""
    file_name: str = ""
    uploaded_at: Timestamp = None
    load_id: str = ""


class Rating(ApiModel):
    id: str
    rating: Optional[float] = None
    comment: str = ""
    customer_name: str = ""
    load_id: str = ""
    created_at: Timestamp = None


class DriverStats(ApiModel):
    total_loads: int = 0
    total_tickets: int = 0
    total_ratings: int = 0
    avg_rating: Optional[float] = None


class DriverSummary(ApiModel):
    """Identity joined with the driver's loads, scale tickets and ratings."""
    identity: IdentitySummary
    loads: list[LoadSummary] = Field(default_factory=list)
    tickets: list[ScaleTicket] = Field(default_factory=list)
    ratings: list[Rating] = Field(default_factory=list)
    stats: DriverStats = Field(default_factory=DriverStats)


# --- Response envelopes ---

class DriverListResponse(ApiModel):
    count: int
    users: list[IdentitySummary]


class DriverProfileResponse(ApiModel):
    auth: IdentitySummary
    profile: Optional[dict[str, Any]] = None


class DeleteDriverResponse(ApiModel):
    ok: bool = True
    uid: str


class PurgeDriverRecordsResponse(ApiModel):
    ok: bool = True
    uid: str
    removed: list[str] = Field(default_factory=list)
