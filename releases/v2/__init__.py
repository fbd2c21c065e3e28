"""Release v2."""
