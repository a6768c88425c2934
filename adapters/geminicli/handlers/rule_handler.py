"""Gemini CLI rule handler: ``GEMINI.md`` plus ``.gemini/memories/``."""

from core.canonical_models import RootPath
from adapters.shared.rule_handler import MarkdownRuleHandler


class GeminiRuleHandler(MarkdownRuleHandler):
    tool_name = 'geminicli'
    root_path = RootPath('.', 'GEMINI.md')
    non_root_dir = '.gemini/memories'
    global_root_path = RootPath('.gemini', 'GEMINI.md')
