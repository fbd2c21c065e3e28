"""Release v1."""
