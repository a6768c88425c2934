from .adapter import GeminiCliAdapter

__all__ = ['GeminiCliAdapter']
