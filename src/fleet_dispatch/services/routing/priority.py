"""Priority weights used to bias stop ordering."""

from __future__ import annotations

from ...models.domain import Priority
from .errors import InvalidPriority

PRIORITY_WEIGHTS: dict[Priority, int] = {
    Priority.URGENT: 4,
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


def weight(priority: Priority | str) -> int:
    """Return the integer weight (1-4) for a priority label."""
    if isinstance(priority, Priority):
        return PRIORITY_WEIGHTS[priority]
    if not isinstance(priority, str):
        raise InvalidPriority(priority)
    try:
        return PRIORITY_WEIGHTS[Priority(priority.strip().lower())]
    except ValueError as exc:
        raise InvalidPriority(priority) from exc


def priority_bonus(priority: Priority | str) -> float:
    """Distance penalty in km added to a candidate stop; urgent stops get the smallest."""
    return (5 - weight(priority)) * 2
