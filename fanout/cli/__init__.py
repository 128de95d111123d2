"""Fanout CLI — Typer-based command-line interface.

Provides the ``fanout`` command with subcommands for routing values,
verifying chained log files, and listing destination capabilities.

All output uses Rich for formatted terminal display.
"""
