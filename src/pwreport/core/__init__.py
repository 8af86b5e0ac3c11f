"""Core infrastructure shared by the extraction engine and the CLI."""
