"""
Gemini CLI MCP handler.

Servers live in the ``mcpServers`` key of ``.gemini/settings.json``, which
also holds the rest of the Gemini settings; only that key is replaced.
"""

from core.canonical_models import RootPath
from adapters.shared.mcp_handler import McpJsonHandler


class GeminiMcpHandler(McpJsonHandler):
    tool_name = 'geminicli'
    mcp_file = RootPath('.gemini', 'settings.json')
    global_mcp_file = RootPath('.gemini', 'settings.json')
    merge_into_existing = True
