"""Command line interface for sface-formatter."""
