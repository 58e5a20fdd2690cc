"""Correlated random data synthesis engine."""
