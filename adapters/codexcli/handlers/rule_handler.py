"""
Codex CLI rule handler.

- Project: ``AGENTS.md`` at the repository root, other rules as memory
  files in ``.codex/memories/``
- Global: ``~/.codex/AGENTS.md`` only
"""

from core.canonical_models import RootPath
from adapters.shared.rule_handler import MarkdownRuleHandler


class CodexRuleHandler(MarkdownRuleHandler):
    tool_name = 'codexcli'
    root_path = RootPath('.', 'AGENTS.md')
    non_root_dir = '.codex/memories'
    global_root_path = RootPath('.codex', 'AGENTS.md')
