"""Route optimization engine."""
