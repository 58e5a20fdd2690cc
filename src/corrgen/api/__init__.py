"""Import-first API and command line for corrgen."""
