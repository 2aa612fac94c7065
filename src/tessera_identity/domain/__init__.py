"""Domain layer for the identity core."""
