"""Command-line entry points for alphastudio."""
