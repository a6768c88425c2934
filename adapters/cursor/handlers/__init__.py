"""Cursor config type handlers."""
