"""Infrastructure: reference data and snapshot persistence."""
