"""Fleet dispatch backend: delivery route optimization and its API."""

__version__ = "0.1.0"
