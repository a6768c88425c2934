"""GitHub Copilot MCP handler (``.vscode/mcp.json`` with a ``servers`` map)."""

from core.canonical_models import RootPath
from adapters.shared.mcp_handler import McpJsonHandler


class CopilotMcpHandler(McpJsonHandler):
    tool_name = 'copilot'
    mcp_file = RootPath('.vscode', 'mcp.json')
    servers_key = 'servers'
