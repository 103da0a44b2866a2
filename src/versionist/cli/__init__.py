"""Command line interface for versionist."""
