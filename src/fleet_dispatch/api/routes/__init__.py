"""Route group exports."""

from . import health, routes, trucks, updates

__all__ = ["health", "routes", "trucks", "updates"]
