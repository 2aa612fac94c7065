"""Shared domain building blocks (time, exceptions)."""
