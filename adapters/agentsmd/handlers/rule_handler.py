"""AGENTS.md rule handler: ``AGENTS.md`` plus ``.agents/memories/``."""

from core.canonical_models import RootPath
from adapters.shared.rule_handler import MarkdownRuleHandler


class AgentsMdRuleHandler(MarkdownRuleHandler):
    tool_name = 'agentsmd'
    root_path = RootPath('.', 'AGENTS.md')
    non_root_dir = '.agents/memories'
