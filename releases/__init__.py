"""Release entry points, one package per release."""
