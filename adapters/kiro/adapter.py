"""
Kiro adapter - coordinator.

Delegates to config-type-specific handlers.
"""

from core.adapter_interface import ToolAdapter
from core.canonical_models import ConfigType
from .handlers.ignore_handler import KiroIgnoreHandler
from .handlers.mcp_handler import KiroMcpHandler
from .handlers.rule_handler import KiroRuleHandler


class KiroAdapter(ToolAdapter):
    """Adapter for the Kiro IDE (``.kiro/``)."""

    def __init__(self):
        super().__init__()
        self._handlers = {
            ConfigType.RULES: KiroRuleHandler(),
            ConfigType.IGNORE: KiroIgnoreHandler(),
            ConfigType.MCP: KiroMcpHandler(),
        }

    @property
    def tool_name(self) -> str:
        return "kiro"

    @property
    def display_name(self) -> str:
        return "Kiro"
