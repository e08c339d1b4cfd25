"""Command-line interface for taskexec."""
