"""Command-line entry points for PolyIO."""
