"""AGENTS.md config type handlers."""
