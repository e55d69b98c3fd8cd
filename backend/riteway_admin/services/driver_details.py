"""Driver detail aggregation across identity, deliveries, scale tickets and ratings."""
from __future__ import annotations

import asyncio
from typing import List, Optional

from riteway_admin.core.logging import logger
from riteway_admin.models.drivers import (
    DriverStats,
    DriverSummary,
    LoadSummary,
    Rating,
    RawDelivery,
    ScaleTicket,
)
from riteway_admin.services.identity import IdentityAdapter
from riteway_admin.services.projections import (
    coerce_number,
    delivery_matches,
    project_load,
    project_rating,
    project_ticket,
    summarize_identity,
)
from riteway_admin.services.record_store import RecordStore


def average_rating(ratings: List[Rating]) -> Optional[float]:
    """Mean rating, counting a missing value as 0; ``None`` when there are no ratings."""
    if not ratings:
        return None
    return sum(coerce_number(item.rating) for item in ratings) / len(ratings)


class DriverAggregator:
    """Builds a DriverSummary for one driver id.

    Identity is resolved first and anchors the join: when it is missing the
    record store is never read. The deliveries scan and the two partition
    reads are independent and run concurrently. The reads are not atomic
    with respect to each other; each call recomputes from scratch.
    """

    def __init__(
        self,
        identity: IdentityAdapter,
        records: RecordStore,
        *,
        deliveries_path: str = "deliveries",
        tickets_path: str = "scaleTickets",
        ratings_path: str = "ratings",
    ) -> None:
        self._identity = identity
        self._records = records
        self._deliveries_path = deliveries_path
        self._tickets_path = tickets_path
        self._ratings_path = ratings_path

    async def aggregate(self, driver_id: str) -> DriverSummary:
        identity = await asyncio.to_thread(self._identity.get_by_id, driver_id)

        results = await asyncio.gather(
            asyncio.to_thread(self._matching_loads, driver_id, identity.email),
            asyncio.to_thread(self._tickets, driver_id),
            asyncio.to_thread(self._ratings, driver_id),
            return_exceptions=True,
        )
        failures = [result for result in results if isinstance(result, BaseException)]
        if failures:
            if len(failures) > 1:
                logger.error(
                    "Driver details reads failed",
                    uid=driver_id,
                    errors=[str(failure) for failure in failures],
                )
            raise failures[0]
        loads, tickets, ratings = results

        summary = DriverSummary(
            identity=summarize_identity(identity),
            loads=loads,
            tickets=tickets,
            ratings=ratings,
            stats=DriverStats(
                total_loads=len(loads),
                total_tickets=len(tickets),
                total_ratings=len(ratings),
                avg_rating=average_rating(ratings),
            ),
        )
        logger.info(
            "Driver details aggregated",
            uid=driver_id,
            loads=len(loads),
            tickets=len(tickets),
            ratings=len(ratings),
        )
        return summary

    def _matching_loads(self, driver_id: str, email: Optional[str]) -> List[LoadSummary]:
        driver_email = email.lower() if isinstance(email, str) and email else None
        loads: List[LoadSummary] = []
        for delivery_id, raw in self._records.read_all(self._deliveries_path).items():
            delivery = RawDelivery.model_validate(raw)
            if delivery_matches(delivery, driver_id, driver_email):
                loads.append(project_load(delivery_id, delivery))
        return loads

    def _tickets(self, driver_id: str) -> List[ScaleTicket]:
        partition = self._records.read_partition(self._tickets_path, driver_id)
        return [project_ticket(ticket_id, raw) for ticket_id, raw in partition.items()]

    def _ratings(self, driver_id: str) -> List[Rating]:
        partition = self._records.read_partition(self._ratings_path, driver_id)
        return [project_rating(rating_id, raw) for rating_id, raw in partition.items()]
