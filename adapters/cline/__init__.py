from .adapter import ClineAdapter

__all__ = ['ClineAdapter']
