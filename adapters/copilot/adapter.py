"""
GitHub Copilot adapter - coordinator.

Delegates to config-type-specific handlers.
"""

from core.adapter_interface import ToolAdapter
from core.canonical_models import ConfigType
from .handlers.command_handler import CopilotCommandHandler
from .handlers.mcp_handler import CopilotMcpHandler
from .handlers.rule_handler import CopilotRuleHandler
from .handlers.subagent_handler import CopilotSubagentHandler


class CopilotAdapter(ToolAdapter):
    """
    Adapter for GitHub Copilot.

    Coordinates between different config type handlers.
    """

    def __init__(self):
        """Initialize adapter with handlers."""
        super().__init__()
        self._handlers = {
            ConfigType.RULES: CopilotRuleHandler(),
            ConfigType.MCP: CopilotMcpHandler(),
            ConfigType.COMMANDS: CopilotCommandHandler(),
            ConfigType.SUBAGENTS: CopilotSubagentHandler(),
        }

    @property
    def tool_name(self) -> str:
        return "copilot"

    @property
    def display_name(self) -> str:
        return "GitHub Copilot"
