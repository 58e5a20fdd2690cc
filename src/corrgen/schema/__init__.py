"""Schema models, configuration parsing and built-in samples."""
