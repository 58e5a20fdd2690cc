"""Descriptive statistics and realized-correlation reporting."""
