"""
Claude Code adapter - coordinator.

Delegates to config-type-specific handlers.
"""

from core.adapter_interface import ToolAdapter
from core.canonical_models import ConfigType
from .handlers.command_handler import ClaudeCommandHandler
from .handlers.hooks_handler import ClaudeHooksHandler
from .handlers.ignore_handler import ClaudeIgnoreHandler
from .handlers.mcp_handler import ClaudeMcpHandler
from .handlers.rule_handler import ClaudeRuleHandler
from .handlers.skill_handler import ClaudeSkillHandler
from .handlers.subagent_handler import ClaudeSubagentHandler


class ClaudeAdapter(ToolAdapter):
    """
    Adapter for Claude Code.

    Supports every config type; ignore rules and hooks are merged into the
    settings files under ``.claude/``.
    """

    def __init__(self):
        """Initialize adapter with handlers for each config type."""
        super().__init__()
        self._handlers = {
            ConfigType.RULES: ClaudeRuleHandler(),
            ConfigType.IGNORE: ClaudeIgnoreHandler(),
            ConfigType.MCP: ClaudeMcpHandler(),
            ConfigType.COMMANDS: ClaudeCommandHandler(),
            ConfigType.SUBAGENTS: ClaudeSubagentHandler(),
            ConfigType.SKILLS: ClaudeSkillHandler(),
            ConfigType.HOOKS: ClaudeHooksHandler(),
        }

    @property
    def tool_name(self) -> str:
        return "claudecode"

    @property
    def display_name(self) -> str:
        return "Claude Code"
