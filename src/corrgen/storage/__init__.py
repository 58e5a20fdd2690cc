"""Delimited-text and spreadsheet import/export of generated tables."""
