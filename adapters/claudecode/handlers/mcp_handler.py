"""
Claude Code MCP handler.

Project servers live in ``.mcp.json`` (owned by the engine). User servers
live in ``~/.claude.json`` next to unrelated Claude state, so global runs
only replace its ``mcpServers`` key.
"""

from core.canonical_models import RootPath
from adapters.shared.mcp_handler import McpJsonHandler


class ClaudeMcpHandler(McpJsonHandler):
    tool_name = 'claudecode'
    mcp_file = RootPath('.', '.mcp.json')
    global_mcp_file = RootPath('.', '.claude.json')
    merge_global = True
