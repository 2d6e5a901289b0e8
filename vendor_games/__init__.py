"""Excel -> vendor games JSON converter."""

__version__ = "0.1.0"
