"""Spreadsheet decoding into cell grids."""
