from .adapter import CodexCliAdapter

__all__ = ['CodexCliAdapter']
