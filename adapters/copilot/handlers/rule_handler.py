"""
GitHub Copilot rule handler.

- Root rule: ``.github/copilot-instructions.md``
- Non-root rules: ``.github/instructions/<name>.instructions.md`` with
  ``description`` and ``applyTo`` (comma-separated globs, ``**`` when the
  rule has none)
"""

from core.canonical_models import CanonicalRule, RootPath, ToolFile
from core.frontmatter import parse_frontmatter, stringify_frontmatter
from adapters.shared.rule_handler import MarkdownRuleHandler

DEFAULT_APPLY_TO = '**'


class CopilotRuleHandler(MarkdownRuleHandler):
    """Handler for Copilot custom instructions."""

    tool_name = 'copilot'
    root_path = RootPath('.github', 'copilot-instructions.md')
    non_root_dir = '.github/instructions'
    file_extension = '.instructions.md'

    def render_non_root(self, rule: CanonicalRule) -> str:
        frontmatter = {
            'description': rule.description or None,
            'applyTo': ','.join(rule.globs) if rule.globs else DEFAULT_APPLY_TO,
        }
        frontmatter.update(rule.get_metadata(self.tool_name) or {})
        return stringify_frontmatter(frontmatter, rule.body)

    def parse_non_root(self, tool_file: ToolFile) -> CanonicalRule:
        frontmatter, body = parse_frontmatter(tool_file.content, tool_file.relative_path)
        description = frontmatter.pop('description', None) or ''
        apply_to = frontmatter.pop('applyTo', None) or DEFAULT_APPLY_TO
        globs = [g.strip() for g in str(apply_to).split(',') if g.strip()]

        rule = CanonicalRule(body=body, description=str(description), globs=globs)
        if frontmatter:
            rule.add_metadata(self.tool_name, frontmatter)
        return rule
