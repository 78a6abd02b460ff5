"""Command line interface for jot."""
