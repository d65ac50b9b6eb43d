"""Fleet record storage backends."""

from .storage import DeliveryWithClient, InMemoryStorage, Storage, build_stops, seed_sample_data

__all__ = ["Storage", "InMemoryStorage", "DeliveryWithClient", "build_stops", "seed_sample_data"]
