"""
Codex CLI adapter - coordinator.

Delegates to config-type-specific handlers.
"""

from core.adapter_interface import ToolAdapter
from core.canonical_models import ConfigType
from .handlers.command_handler import CodexCommandHandler
from .handlers.mcp_handler import CodexMcpHandler
from .handlers.rule_handler import CodexRuleHandler


class CodexCliAdapter(ToolAdapter):
    """Adapter for OpenAI Codex CLI; MCP servers and prompts are user-level only."""

    def __init__(self):
        super().__init__()
        self._handlers = {
            ConfigType.RULES: CodexRuleHandler(),
            ConfigType.MCP: CodexMcpHandler(),
            ConfigType.COMMANDS: CodexCommandHandler(),
        }

    @property
    def tool_name(self) -> str:
        return "codexcli"

    @property
    def display_name(self) -> str:
        return "Codex CLI"
