"""
Feature processors, one per config type.

PROCESSORS maps each ConfigType to its processor class; the orchestrator
walks it in ConfigType order.
"""

from core.canonical_models import ConfigType

from .base import FeatureProcessor
from .commands import CommandsProcessor
from .hooks import HooksProcessor
from .ignore import IgnoreProcessor
from .mcp import McpProcessor
from .rules import RulesProcessor
from .skills import SkillsProcessor
from .subagents import SubagentsProcessor

PROCESSORS = {
    ConfigType.RULES: RulesProcessor,
    ConfigType.IGNORE: IgnoreProcessor,
    ConfigType.MCP: McpProcessor,
    ConfigType.COMMANDS: CommandsProcessor,
    ConfigType.SUBAGENTS: SubagentsProcessor,
    ConfigType.SKILLS: SkillsProcessor,
    ConfigType.HOOKS: HooksProcessor,
}

__all__ = [
    'FeatureProcessor',
    'RulesProcessor',
    'IgnoreProcessor',
    'McpProcessor',
    'CommandsProcessor',
    'SubagentsProcessor',
    'SkillsProcessor',
    'HooksProcessor',
    'PROCESSORS',
]
