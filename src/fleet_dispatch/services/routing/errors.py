"""Route optimization error types."""

from __future__ import annotations


class RoutingError(ValueError):
    """Base class for invalid optimizer input."""

    @property
    def kind(self) -> str:
        return type(self).__name__


class InvalidPriority(RoutingError):
    """A stop carries a priority label outside urgent/high/medium/low."""

    def __init__(self, priority: object):
        self.priority = priority
        super().__init__(f"Unknown priority {priority!r}; expected one of urgent, high, medium, low.")


class InvalidStrategy(RoutingError):
    """An optimization strategy name was not recognized."""

    def __init__(self, strategy: object):
        self.strategy = strategy
        super().__init__(f"Unknown strategy {strategy!r}; expected one of nearest-neighbor, 2-opt, hybrid.")


class InvalidCoordinate(RoutingError):
    """Latitude or longitude outside the valid range."""

    def __init__(self, latitude: float, longitude: float):
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(
            f"Invalid coordinate ({latitude}, {longitude}); latitude must be within [-90, 90] "
            "and longitude within [-180, 180]."
        )
