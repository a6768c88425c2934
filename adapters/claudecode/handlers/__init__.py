"""Claude Code config type handlers."""
