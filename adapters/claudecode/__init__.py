from .adapter import ClaudeAdapter

__all__ = ['ClaudeAdapter']
