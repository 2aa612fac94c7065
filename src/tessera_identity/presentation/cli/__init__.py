"""Command-line interface."""

from tessera_identity.presentation.cli.app import app, cli

__all__ = ["app", "cli"]
