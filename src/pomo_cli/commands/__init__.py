"""Typer sub-commands for Pomo CLI."""
