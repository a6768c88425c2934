from .adapter import KiroAdapter

__all__ = ['KiroAdapter']
