"""Logging setup and diagnostic log buffering."""
