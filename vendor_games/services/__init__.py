"""Conversion pipeline and export orchestration."""
