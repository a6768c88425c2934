"""
Cursor MCP handler (``.cursor/mcp.json``).

Cursor spells environment references ``${env:VAR}`` where the canonical
form is ``${VAR}``; ``env`` values are rewritten in both directions.
"""

import re
from typing import Any, Dict

from core.canonical_models import RootPath
from adapters.shared.mcp_handler import McpJsonHandler

CANONICAL_ENV_PATTERN = re.compile(r'\$\{(?!env:)([^}:]+)\}')
CURSOR_ENV_PATTERN = re.compile(r'\$\{env:([^}]+)\}')


class CursorMcpHandler(McpJsonHandler):
    tool_name = 'cursor'
    mcp_file = RootPath('.cursor', 'mcp.json')
    global_mcp_file = RootPath('.cursor', 'mcp.json')

    def export_server(self, server: Dict[str, Any]) -> Dict[str, Any]:
        return self._rewrite_env(server, CANONICAL_ENV_PATTERN, r'${env:\1}')

    def import_server(self, server: Dict[str, Any]) -> Dict[str, Any]:
        return self._rewrite_env(server, CURSOR_ENV_PATTERN, r'${\1}')

    def _rewrite_env(self, server: Dict[str, Any], pattern, replacement: str) -> Dict[str, Any]:
        server = dict(server)
        env = server.get('env')
        if isinstance(env, dict):
            server['env'] = {key: pattern.sub(replacement, value) if isinstance(value, str)
                             else value
                             for key, value in env.items()}
        return server
