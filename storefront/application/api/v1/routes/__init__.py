"""v1 API routes."""
