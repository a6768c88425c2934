"""
Cline adapter - coordinator.

Delegates to config-type-specific handlers.
"""

from core.adapter_interface import ToolAdapter
from core.canonical_models import ConfigType
from .handlers.ignore_handler import ClineIgnoreHandler
from .handlers.rule_handler import ClineRuleHandler


class ClineAdapter(ToolAdapter):
    """Adapter for Cline (``.clinerules/`` and ``.clineignore``)."""

    def __init__(self):
        super().__init__()
        self._handlers = {
            ConfigType.RULES: ClineRuleHandler(),
            ConfigType.IGNORE: ClineIgnoreHandler(),
        }

    @property
    def tool_name(self) -> str:
        return "cline"

    @property
    def display_name(self) -> str:
        return "Cline"
