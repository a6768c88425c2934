from .adapter import CopilotAdapter

__all__ = ['CopilotAdapter']
