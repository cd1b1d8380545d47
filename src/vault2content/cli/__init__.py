"""Command-line interface for vault2content."""
