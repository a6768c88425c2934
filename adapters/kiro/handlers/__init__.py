"""Kiro config type handlers."""
