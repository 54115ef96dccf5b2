"""In-memory product catalog service."""
