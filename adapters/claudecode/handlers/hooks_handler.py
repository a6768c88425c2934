"""
Claude Code hooks handler.

Hooks are merged into ``.claude/settings.json`` under ``hooks``, with
PascalCase event names and definitions grouped by matcher:

{
  "hooks": {
    "PreToolUse": [
      {"matcher": "Bash", "hooks": [{"type": "command", "command": "..."}]}
    ]
  }
}

Relative commands are anchored at ``$CLAUDE_PROJECT_DIR``; the prefix is
stripped again on import.
"""

from typing import Any, Dict, List

from core.canonical_models import RootPath
from adapters.shared.hooks_handler import HookMap, JsonHooksHandler

CANONICAL_TO_CLAUDE_EVENTS = {
    'sessionStart': 'SessionStart',
    'sessionEnd': 'SessionEnd',
    'preToolUse': 'PreToolUse',
    'postToolUse': 'PostToolUse',
    'beforeSubmitPrompt': 'UserPromptSubmit',
    'stop': 'Stop',
    'subagentStop': 'SubagentStop',
    'preCompact': 'PreCompact',
    'permissionRequest': 'PermissionRequest',
    'notification': 'Notification',
    'setup': 'Setup',
}

CLAUDE_TO_CANONICAL_EVENTS = {v: k for k, v in CANONICAL_TO_CLAUDE_EVENTS.items()}

PROJECT_DIR_PREFIX = '$CLAUDE_PROJECT_DIR/'


class ClaudeHooksHandler(JsonHooksHandler):
    """Handler for hooks in Claude Code settings."""

    tool_name = 'claudecode'
    supports_global = True
    hooks_file = RootPath('.claude', 'settings.json')
    supported_events = list(CANONICAL_TO_CLAUDE_EVENTS)
    merge_into_existing = True

    def export_hooks(self, hooks: HookMap) -> Dict[str, Any]:
        claude: Dict[str, Any] = {}
        for event, definitions in hooks.items():
            by_matcher: Dict[str, List[Dict[str, Any]]] = {}
            for definition in definitions:
                by_matcher.setdefault(definition.get('matcher') or '', []).append(definition)

            entries = []
            for matcher, group in by_matcher.items():
                entry = {'matcher': matcher} if matcher else {}
                entry['hooks'] = [self._export_definition(d) for d in group]
                entries.append(entry)
            claude[CANONICAL_TO_CLAUDE_EVENTS.get(event, event)] = entries
        return claude

    def import_hooks(self, hooks: Dict[str, Any]) -> HookMap:
        canonical: HookMap = {}
        for event, entries in hooks.items():
            if not isinstance(entries, list):
                continue
            definitions = []
            for entry in entries:
                if not isinstance(entry, dict) or not isinstance(entry.get('hooks', []), list):
                    continue
                matcher = entry.get('matcher')
                for hook in entry.get('hooks', []):
                    if isinstance(hook, dict):
                        definitions.append(self._import_definition(hook, matcher))
            if definitions:
                canonical[CLAUDE_TO_CANONICAL_EVENTS.get(event, event)] = definitions
        return canonical

    def _export_definition(self, definition: Dict[str, Any]) -> Dict[str, Any]:
        hook = {'type': definition.get('type') or 'command'}
        command = definition.get('command')
        if command is not None:
            if not command.startswith('$'):
                if command.startswith('./'):
                    command = command[2:]
                command = PROJECT_DIR_PREFIX + command
            hook['command'] = command
        for key in ('timeout', 'prompt'):
            if definition.get(key) is not None:
                hook[key] = definition[key]
        return hook

    def _import_definition(self, hook: Dict[str, Any], matcher: Any) -> Dict[str, Any]:
        definition = {'type': hook.get('type') if hook.get('type') in ('command', 'prompt')
                      else 'command'}
        command = hook.get('command')
        if isinstance(command, str):
            if command.startswith(PROJECT_DIR_PREFIX):
                command = command[len(PROJECT_DIR_PREFIX):]
            definition['command'] = command
        if isinstance(hook.get('timeout'), (int, float)):
            definition['timeout'] = hook['timeout']
        if isinstance(hook.get('prompt'), str):
            definition['prompt'] = hook['prompt']
        if isinstance(matcher, str) and matcher:
            definition['matcher'] = matcher
        return definition
