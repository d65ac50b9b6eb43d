"""Priority-weighted nearest-neighbor tour construction."""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import Coordinate, Stop
from ..geospatial import distance
from .priority import priority_bonus

logger = logging.getLogger(__name__)


def construct(depot: Coordinate, stops: Sequence[Stop]) -> list[Stop]:
    """Greedily order ``stops`` starting from ``depot``.

    At each step the unvisited stop with the smallest
    ``distance(current, stop) + priority_bonus(stop.priority)`` is taken next.
    Ties go to the stop that appears first in the input.
    """
    remaining = list(stops)
    ordered: list[Stop] = []
    current = depot

    while remaining:
        best_index = 0
        best_score = float("inf")
        for index, stop in enumerate(remaining):
            score = distance(current, stop.coordinate) + priority_bonus(stop.priority)
            if score < best_score:
                best_score = score
                best_index = index

        chosen = remaining.pop(best_index)
        ordered.append(chosen)
        current = chosen.coordinate

    logger.debug("Nearest-neighbor built order %s", [stop.id for stop in ordered])
    return ordered
