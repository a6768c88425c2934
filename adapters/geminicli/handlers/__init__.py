"""Gemini CLI config type handlers."""
