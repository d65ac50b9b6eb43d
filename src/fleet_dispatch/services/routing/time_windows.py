"""Delivery-window pre-pass for the route optimizer."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from ...models.domain import Stop

logger = logging.getLogger(__name__)


def filter_and_order(stops: Sequence[Stop], now: datetime) -> list[Stop]:
    """Drop stops whose deadline has passed and sort the rest by deadline.

    Stops without ``latest_delivery`` are kept and placed after every dated
    stop, in their original relative order. ``now`` must use the same
    timezone awareness as the stop deadlines.
    """
    reachable = [
        stop for stop in stops if stop.latest_delivery is None or stop.latest_delivery > now
    ]
    dropped = len(stops) - len(reachable)
    if dropped:
        logger.warning(
            "Discarded %d of %d stops whose delivery window closed before %s",
            dropped,
            len(stops),
            now.isoformat(),
        )
    return sorted(
        reachable,
        key=lambda stop: (stop.latest_delivery is None, stop.latest_delivery or now),
    )
