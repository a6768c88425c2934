"""Codex CLI config type handlers."""
