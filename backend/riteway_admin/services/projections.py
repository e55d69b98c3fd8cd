"""Projection of loosely-shaped store records into API summary models.

Defaulting of absent or ill-typed fields happens here and nowhere else:
text becomes ``""``, numbers become ``0``, timestamps stay nullable.
Nothing in this module raises on missing data.
"""
from __future__ import annotations

import math
from typing import Any, Dict, Optional

from riteway_admin.models.drivers import (
    DeliveryStatus,
    IdentityRecord,
    IdentitySummary,
    LoadSummary,
    Rating,
    RawDelivery,
    RawRating,
    RawScaleTicket,
    ScaleTicket,
    Timestamp,
)


_KNOWN_STATUSES = {status.value for status in DeliveryStatus}


def coerce_number(value: Any) -> float:
    """Numbers pass through, numeric strings are parsed, everything else is 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0
        return number if math.isfinite(number) else 0
    return 0


def coerce_text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def coerce_items(value: Any) -> str:
    if isinstance(value, dict):
        value = list(value.values())
    if isinstance(value, list):
        return ", ".join(text for text in (coerce_text(item) for item in value) if text)
    return coerce_text(value)


def coerce_timestamp(value: Any) -> Timestamp:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, str)):
        return value
    return None


def parse_rating(value: Any) -> Optional[float]:
    """A finite rating value, or ``None`` when missing or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def normalize_status(value: Any) -> str:
    text = coerce_text(value)
    lowered = text.strip().lower()
    return lowered if lowered in _KNOWN_STATUSES else text


def summarize_identity(record: IdentityRecord) -> IdentitySummary:
    return IdentitySummary(
        uid=record.id,
        email=record.email,
        display_name=record.display_name,
        phone_number=record.phone_number,
        disabled=record.disabled,
        created_at=record.created_at,
        last_sign_in_at=record.last_sign_in_at,
    )


def delivery_matches(delivery: RawDelivery, driver_id: str, driver_email: Optional[str]) -> bool:
    """Match on assigned email (case-insensitive) or assigned driver id.

    ``driver_email`` must already be lower-cased. Absent or non-string
    assignment fields never match.
    """
    details = delivery.details
    assigned_email = details.assigned_driver_email
    if driver_email and isinstance(assigned_email, str) and assigned_email.lower() == driver_email:
        return True
    assigned_id = details.assigned_driver_id
    return isinstance(assigned_id, str) and bool(assigned_id) and assigned_id == driver_id


def project_load(delivery_id: str, delivery: RawDelivery) -> LoadSummary:
    details = delivery.details
    return LoadSummary(
        id=delivery_id,
        status=normalize_status(delivery.status),
        customer_name=coerce_text(details.customer_name),
        address=coerce_text(details.address),
        items=coerce_items(details.items),
        yards_delivered=coerce_number(details.yards_delivered),
        revenue=coerce_number(details.revenue),
        profit=coerce_number(details.profit),
        assigned_driver_email=coerce_text(details.assigned_driver_email),
        assigned_driver_id=coerce_text(details.assigned_driver_id),
        created_at=coerce_timestamp(delivery.created_at),
    )


def project_ticket(ticket_id: str, raw: Dict[str, Any]) -> ScaleTicket:
    ticket = RawScaleTicket.model_validate(raw)
    return ScaleTicket(
        id=ticket_id,
        url=coerce_text(ticket.url),
        file_name=coerce_text(ticket.file_name),
        uploaded_at=coerce_timestamp(ticket.uploaded_at),
        load_id=coerce_text(ticket.load_id),
    )


def project_rating(rating_id: str, raw: Dict[str, Any]) -> Rating:
    rating = RawRating.model_validate(raw)
    return Rating(
        id=rating_id,
        rating=parse_rating(rating.rating),
        comment=coerce_text(rating.comment),
        customer_name=coerce_text(rating.customer_name),
        load_id=coerce_text(rating.load_id),
        created_at=coerce_timestamp(rating.created_at),
    )
