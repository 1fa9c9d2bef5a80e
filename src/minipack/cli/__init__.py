"""Command-line interface for minipack."""
