"""Command-line interface for lightgate."""
