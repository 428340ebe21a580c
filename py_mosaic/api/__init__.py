"""HTTP API for check-in boards."""
