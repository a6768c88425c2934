from .adapter import CursorAdapter

__all__ = ['CursorAdapter']
