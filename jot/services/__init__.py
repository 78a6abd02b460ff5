"""Remote services used by jot."""
