"""API route handlers that belong to no feature module."""
