"""Utility helpers for Pomo CLI."""
