"""2-opt local search over a stop sequence."""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import Coordinate, Stop
from ..geospatial import route_length

logger = logging.getLogger(__name__)

MIN_STOPS_FOR_2OPT = 4


def refine(order: Sequence[Stop], depot: Coordinate | None = None) -> list[Stop]:
    """Reverse sub-segments of ``order`` while doing so shortens the path.

    The first stop never moves, so the depot leg is the same for every
    candidate. A reversal is kept only when it is strictly shorter, which
    leaves equal-length orders untouched.
    """
    improved = list(order)
    if len(improved) < MIN_STOPS_FOR_2OPT:
        return improved

    best_length = route_length(improved, depot)
    passes = 0
    has_improvement = True

    while has_improvement:
        has_improvement = False
        passes += 1
        for i in range(1, len(improved) - 2):
            for j in range(i + 1, len(improved)):
                if j - i == 1:
                    continue
                candidate = improved[:i] + improved[i : j + 1][::-1] + improved[j + 1 :]
                candidate_length = route_length(candidate, depot)
                if candidate_length < best_length:
                    improved = candidate
                    best_length = candidate_length
                    has_improvement = True

    logger.debug("2-opt settled after %d passes at %.3f km", passes, best_length)
    return improved
