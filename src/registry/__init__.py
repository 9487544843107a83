"""Registry clients and their shared error types."""
