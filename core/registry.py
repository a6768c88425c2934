"""
Tool registry.

Holds the registered ToolAdapters in registration order. That order is the
expansion of the ``"*"`` target wildcard, so output is deterministic across
runs and independent of filesystem ordering.
"""

from typing import Dict, List, Optional

from .adapter_interface import ToolAdapter
from .canonical_models import ConfigType, Scope


class ToolRegistry:
    """Registry of available tool adapters."""

    def __init__(self):
        self._adapters: Dict[str, ToolAdapter] = {}

    def register(self, adapter: ToolAdapter):
        """
        Register a tool adapter.

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if adapter.tool_name in self._adapters:
            raise ValueError(f"Tool '{adapter.tool_name}' already registered")
        self._adapters[adapter.tool_name] = adapter

    def unregister(self, tool_name: str):
        self._adapters.pop(tool_name, None)

    def get_adapter(self, tool_name: str) -> Optional[ToolAdapter]:
        """Adapter for ``tool_name``, or None."""
        return self._adapters.get(tool_name)

    def list_tools(self) -> List[str]:
        return list(self._adapters.keys())

    def supports_config_type(self, tool_name: str, config_type: ConfigType) -> bool:
        adapter = self.get_adapter(tool_name)
        return adapter is not None and adapter.supports(config_type)

    def get_tools_supporting(self, config_type: ConfigType,
                             scope: Optional[Scope] = None) -> List[str]:
        """Tools with a handler for ``config_type`` (and ``scope`` when given), in order."""
        return [name for name, adapter in self._adapters.items()
                if adapter.supports(config_type, scope)]

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)
