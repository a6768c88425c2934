"""
Cursor rule handler.

Cursor has no dedicated instructions file: every rule, root included, is
an ``.mdc`` file in ``.cursor/rules/``:

---
description: API conventions
globs: src/api/**/*.ts, src/server/**/*.ts
alwaysApply: false
---
Rule body...

The root rule is written with ``alwaysApply: true``. A ``cursor`` block in
the canonical frontmatter overrides any of these fields.
"""

from typing import Any, List

from core.canonical_models import CanonicalRule, ToolFile
from core.frontmatter import parse_frontmatter, stringify_frontmatter
from adapters.shared.rule_handler import MarkdownRuleHandler


class CursorRuleHandler(MarkdownRuleHandler):
    """Handler for Cursor project rules."""

    tool_name = 'cursor'
    non_root_dir = '.cursor/rules'
    fold_root_into_dir = True
    file_extension = '.mdc'

    def render_non_root(self, rule: CanonicalRule) -> str:
        frontmatter = {
            'description': rule.description or None,
            'globs': ', '.join(rule.globs) or None,
            'alwaysApply': rule.root,
        }
        frontmatter.update(rule.get_metadata(self.tool_name) or {})
        return stringify_frontmatter(frontmatter, rule.body)

    def parse_non_root(self, tool_file: ToolFile) -> CanonicalRule:
        frontmatter, body = parse_frontmatter(tool_file.content, tool_file.relative_path)
        description = frontmatter.pop('description', None) or ''
        globs = self._split_globs(frontmatter.pop('globs', None))

        # alwaysApply is kept as a cursor field; the root rule is never inferred
        if not frontmatter.get('alwaysApply'):
            frontmatter.pop('alwaysApply', None)

        rule = CanonicalRule(body=body, description=str(description), globs=globs)
        if frontmatter:
            rule.add_metadata(self.tool_name, frontmatter)
        return rule

    def _split_globs(self, value: Any) -> List[str]:
        if isinstance(value, list):
            return [str(g).strip() for g in value if str(g).strip()]
        if isinstance(value, str):
            return [g.strip() for g in value.split(',') if g.strip()]
        return []
