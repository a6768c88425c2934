"""
Cursor hooks handler.

``.cursor/hooks.json`` uses the canonical camelCase event names directly:

{"version": 1, "hooks": {"afterFileEdit": [{"command": "./format.sh"}]}}
"""

from typing import Any, Dict

from core.canonical_models import CanonicalHooks, RootPath
from adapters.shared.hooks_handler import JsonHooksHandler

CURSOR_HOOK_EVENTS = [
    'sessionStart',
    'sessionEnd',
    'preToolUse',
    'postToolUse',
    'beforeSubmitPrompt',
    'stop',
    'subagentStop',
    'preCompact',
    'postToolUseFailure',
    'subagentStart',
    'beforeShellExecution',
    'afterShellExecution',
    'beforeMCPExecution',
    'afterMCPExecution',
    'beforeReadFile',
    'afterFileEdit',
    'afterAgentResponse',
    'afterAgentThought',
    'beforeTabFileRead',
    'afterTabFileEdit',
]


class CursorHooksHandler(JsonHooksHandler):
    tool_name = 'cursor'
    supports_global = True
    hooks_file = RootPath('.cursor', 'hooks.json')
    supported_events = CURSOR_HOOK_EVENTS

    def build_document(self, hooks: Dict[str, Any], canonical: CanonicalHooks) -> Dict[str, Any]:
        return {'version': canonical.version, 'hooks': hooks}
