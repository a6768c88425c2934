"""Cline config type handlers."""
