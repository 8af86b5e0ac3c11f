"""CLI package for pwreport."""

from pwreport.cli.app import app, main

__all__ = ["app", "main"]
