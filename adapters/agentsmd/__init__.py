from .adapter import AgentsMdAdapter

__all__ = ['AgentsMdAdapter']
