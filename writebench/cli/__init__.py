"""Command-line interface for write-bench using Typer."""

from .app import app, main


__all__ = ["app", "main"]
