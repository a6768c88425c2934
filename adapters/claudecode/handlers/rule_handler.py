"""
Claude Code rule handler.

- Root rule: ``.claude/CLAUDE.md`` (plain markdown, also the global path)
- Non-root rules: ``.claude/rules/*.md`` with an optional ``paths``
  frontmatter field holding comma-separated globs
"""

from typing import Any

from core.canonical_models import CanonicalRule, RootPath, ToolFile
from core.errors import ValidationError
from core.frontmatter import parse_frontmatter, stringify_frontmatter
from adapters.shared.rule_handler import MarkdownRuleHandler


class ClaudeRuleHandler(MarkdownRuleHandler):
    """Handler for Claude Code memory files."""

    tool_name = 'claudecode'
    root_path = RootPath('.claude', 'CLAUDE.md')
    non_root_dir = '.claude/rules'
    global_root_path = RootPath('.claude', 'CLAUDE.md')

    def render_non_root(self, rule: CanonicalRule) -> str:
        block = rule.get_metadata(self.tool_name) or {}
        paths = block.get('paths') or (', '.join(rule.globs) if rule.globs else None)
        return stringify_frontmatter({'paths': paths}, rule.body)

    def parse_non_root(self, tool_file: ToolFile) -> CanonicalRule:
        frontmatter, body = parse_frontmatter(tool_file.content, tool_file.relative_path)
        paths = self._parse_paths(frontmatter.get('paths'), tool_file.relative_path)

        rule = CanonicalRule(body=body)
        if paths:
            rule.globs = [g.strip() for g in paths.split(',') if g.strip()]
            if paths != ', '.join(rule.globs):
                rule.add_metadata(self.tool_name, {'paths': paths})
        return rule

    def _parse_paths(self, value: Any, path: str) -> str:
        """``paths`` may be a comma-separated string or a YAML list."""
        if value is None:
            return ''
        if isinstance(value, list):
            return ', '.join(str(v) for v in value)
        if not isinstance(value, str):
            raise ValidationError("'paths' must be a string or a list of strings", path)
        return value
