"""
Cursor adapter - coordinator.

Delegates to config-type-specific handlers.
"""

from core.adapter_interface import ToolAdapter
from core.canonical_models import ConfigType
from .handlers.command_handler import CursorCommandHandler
from .handlers.hooks_handler import CursorHooksHandler
from .handlers.ignore_handler import CursorIgnoreHandler
from .handlers.mcp_handler import CursorMcpHandler
from .handlers.rule_handler import CursorRuleHandler


class CursorAdapter(ToolAdapter):
    """Adapter for Cursor (``.cursor/`` plus ``.cursorignore``)."""

    def __init__(self):
        super().__init__()
        self._handlers = {
            ConfigType.RULES: CursorRuleHandler(),
            ConfigType.IGNORE: CursorIgnoreHandler(),
            ConfigType.MCP: CursorMcpHandler(),
            ConfigType.COMMANDS: CursorCommandHandler(),
            ConfigType.HOOKS: CursorHooksHandler(),
        }

    @property
    def tool_name(self) -> str:
        return "cursor"

    @property
    def display_name(self) -> str:
        return "Cursor"
