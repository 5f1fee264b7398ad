"""Command-line interface for cardlink."""

from .main import app, main

__all__ = ["app", "main"]
