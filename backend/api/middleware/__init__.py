"""Request dependencies shared by feature routes."""
