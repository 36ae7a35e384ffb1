"""Command-line interface for Tollgate."""
