"""GitHub Copilot config type handlers."""
