"""Application layer: use cases over the identity store."""
