"""Feature extraction modules."""
