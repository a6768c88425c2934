"""Kiro MCP handler (``.kiro/settings/mcp.json``, user-level ``~/.kiro/settings/mcp.json``)."""

from core.canonical_models import RootPath
from adapters.shared.mcp_handler import McpJsonHandler


class KiroMcpHandler(McpJsonHandler):
    tool_name = 'kiro'
    mcp_file = RootPath('.kiro/settings', 'mcp.json')
    global_mcp_file = RootPath('.kiro/settings', 'mcp.json')
