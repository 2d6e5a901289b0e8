"""Command line interface for the vendor games converter."""

from .main import main

__all__ = ["main"]
