"""Command-line interface for domflow."""
