"""Command line interface for rwfs."""
