"""
Gemini CLI adapter - coordinator.

Delegates to config-type-specific handlers.
"""

from core.adapter_interface import ToolAdapter
from core.canonical_models import ConfigType
from .handlers.command_handler import GeminiCommandHandler
from .handlers.ignore_handler import GeminiIgnoreHandler
from .handlers.mcp_handler import GeminiMcpHandler
from .handlers.rule_handler import GeminiRuleHandler


class GeminiCliAdapter(ToolAdapter):
    """Adapter for Google Gemini CLI."""

    def __init__(self):
        super().__init__()
        self._handlers = {
            ConfigType.RULES: GeminiRuleHandler(),
            ConfigType.IGNORE: GeminiIgnoreHandler(),
            ConfigType.MCP: GeminiMcpHandler(),
            ConfigType.COMMANDS: GeminiCommandHandler(),
        }

    @property
    def tool_name(self) -> str:
        return "geminicli"

    @property
    def display_name(self) -> str:
        return "Gemini CLI"
