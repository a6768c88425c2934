"""
AGENTS.md adapter - coordinator.

The tool-neutral AGENTS.md convention only carries rules.
"""

from core.adapter_interface import ToolAdapter
from core.canonical_models import ConfigType
from .handlers.rule_handler import AgentsMdRuleHandler


class AgentsMdAdapter(ToolAdapter):
    """Adapter for the AGENTS.md convention."""

    def __init__(self):
        super().__init__()
        self._handlers = {
            ConfigType.RULES: AgentsMdRuleHandler(),
        }

    @property
    def tool_name(self) -> str:
        return "agentsmd"

    @property
    def display_name(self) -> str:
        return "AGENTS.md"
