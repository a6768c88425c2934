"""
Kiro steering handler.

Every rule becomes a steering document in ``.kiro/steering/``. Rules with
globs are scoped with Kiro's inclusion frontmatter:

---
inclusion: fileMatch
fileMatchPattern: "src/**/*.ts"
---

Root rules and rules without globs are written as plain markdown, which
Kiro always includes.
"""

from core.canonical_models import CanonicalRule, ToolFile
from core.frontmatter import parse_frontmatter, stringify_frontmatter
from adapters.shared.rule_handler import MarkdownRuleHandler


class KiroRuleHandler(MarkdownRuleHandler):
    """Handler for Kiro steering documents."""

    tool_name = 'kiro'
    non_root_dir = '.kiro/steering'
    fold_root_into_dir = True

    def render_non_root(self, rule: CanonicalRule) -> str:
        frontmatter = {}
        if rule.globs and not rule.root:
            frontmatter = {'inclusion': 'fileMatch', 'fileMatchPattern': ','.join(rule.globs)}
        frontmatter.update(rule.get_metadata(self.tool_name) or {})
        return stringify_frontmatter(frontmatter, rule.body)

    def parse_non_root(self, tool_file: ToolFile) -> CanonicalRule:
        frontmatter, body = parse_frontmatter(tool_file.content, tool_file.relative_path)
        rule = CanonicalRule(body=body)

        pattern = frontmatter.get('fileMatchPattern')
        if frontmatter.get('inclusion') == 'fileMatch' and isinstance(pattern, str):
            rule.globs = [g.strip() for g in pattern.split(',') if g.strip()]
            frontmatter.pop('inclusion')
            frontmatter.pop('fileMatchPattern')
        if frontmatter:
            rule.add_metadata(self.tool_name, frontmatter)
        return rule
