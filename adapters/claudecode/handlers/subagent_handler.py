"""
Claude Code subagent handler.

Claude Code format:
---
name: code-reviewer
description: Reviews code for quality
tools: Read, Grep, Glob
model: sonnet|opus|haiku|inherit
---
System prompt...

``name``/``description`` map to canonical fields; everything else is the
``claudecode`` extension block. Model names are stored in their short,
lowercase form.
"""

from typing import Any, Dict, Optional

from core.canonical_models import CanonicalSubagent, ToolFile
from core.errors import ParseError
from core.frontmatter import parse_frontmatter
from adapters.shared.config_type_handler import ValidationResult
from adapters.shared.subagent_handler import MarkdownSubagentHandler

CLAUDE_MODELS = ('opus', 'sonnet', 'haiku', 'inherit')


class ClaudeSubagentHandler(MarkdownSubagentHandler):
    """Handler for Claude Code agent files."""

    tool_name = 'claudecode'
    agents_dir = '.claude/agents'
    global_agents_dir = '.claude/agents'

    def tool_fields(self, subagent: CanonicalSubagent) -> Dict[str, Any]:
        fields = super().tool_fields(subagent)
        if 'model' in fields:
            fields['model'] = self._normalize_model(fields['model'])
        return fields

    def canonical_block(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        if 'model' in fields:
            fields['model'] = self._normalize_model(fields['model'])
        return fields

    def validate(self, tool_file: ToolFile) -> ValidationResult:
        """Claude Code only accepts its model aliases."""
        try:
            frontmatter, _ = parse_frontmatter(tool_file.content, tool_file.relative_path)
        except ParseError as e:
            return ValidationResult(success=False, error=e.message)
        model = frontmatter.get('model')
        if model is not None and model not in CLAUDE_MODELS:
            return ValidationResult(
                success=False,
                error=f"Invalid model '{model}'; expected one of: {', '.join(CLAUDE_MODELS)}",
            )
        return ValidationResult(success=True)

    def _normalize_model(self, model: Optional[str]) -> Optional[str]:
        """Normalize model name to canonical form (lowercase)."""
        if not model:
            return None
        return str(model).lower()
