"""
GitHub Copilot custom agent handler.

Copilot format (``.github/agents/<name>.agent.md``):
---
name: test-agent
description: Test agent description
tools:
  - read
  - grep
model: Claude Sonnet 4
target: vscode
---
Instructions...

Copilot fields (tools, model, target, handoffs, ...) round-trip through the
``copilot`` extension block. When that block has no ``model`` or ``tools``,
they are derived from the ``claudecode`` block: model aliases are mapped to
Copilot's display names and comma-separated tools become a list.
"""

from typing import Any, Dict, List, Optional

from core.canonical_models import CanonicalSubagent
from adapters.shared.subagent_handler import MarkdownSubagentHandler

CLAUDE_TO_COPILOT_MODELS = {
    'sonnet': 'Claude Sonnet 4',
    'opus': 'Claude Opus 4',
    'haiku': 'Claude Haiku 4',
    'inherit': None,
}

# Claude Code fields with no Copilot counterpart
CLAUDE_ONLY_FIELDS = ('permissionMode', 'skills')


class CopilotSubagentHandler(MarkdownSubagentHandler):
    """Handler for Copilot custom agents."""

    tool_name = 'copilot'
    agents_dir = '.github/agents'
    file_extension = '.agent.md'

    def tool_fields(self, subagent: CanonicalSubagent) -> Dict[str, Any]:
        fields = super().tool_fields(subagent)
        claude = subagent.get_metadata('claudecode') or {}

        if 'model' not in fields and claude.get('model'):
            model = self._denormalize_model(claude['model'])
            if model:
                fields['model'] = model
        if 'tools' not in fields and claude.get('tools'):
            fields['tools'] = claude['tools']
        if 'tools' in fields:
            fields['tools'] = self._parse_tools(fields['tools'])

        dropped = [key for key in CLAUDE_ONLY_FIELDS if key in claude]
        if dropped:
            self.warnings.append(
                f"{subagent.relative_file_path}: Copilot does not support "
                f"{', '.join(dropped)}; dropped")
        return fields

    def _parse_tools(self, tools_value: Any) -> List[str]:
        """
        Parse tools from comma-separated string or list.

        Args:
            tools_value: Either string "tool1, tool2" or list ["tool1", "tool2"]

        Returns:
            List of tool names
        """
        if isinstance(tools_value, str):
            return [t.strip() for t in tools_value.split(',') if t.strip()]
        elif isinstance(tools_value, list):
            return tools_value
        return []

    def _denormalize_model(self, model: str) -> Optional[str]:
        """Claude alias -> Copilot display name; unknown names pass through."""
        return CLAUDE_TO_COPILOT_MODELS.get(str(model).lower(), model)
