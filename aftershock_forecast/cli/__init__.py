"""Command-line interface and terminal output."""

from aftershock_forecast.cli.commands import main

__all__ = ["main"]
