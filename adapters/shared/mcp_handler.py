"""
Shared base for JSON MCP configuration handlers.

Flavours:
- owned files (``.cursor/mcp.json``): the handler writes the whole document
- shared settings files (``.gemini/settings.json``): ``merge_into_existing``
  keeps every key except the server map, and the file is never deleted
- ``merge_global`` applies the merge behaviour to the global file only
  (Claude Code keeps user servers in ``~/.claude.json``)
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.canonical_io import MCP_FILE
from core.canonical_models import (
    CANONICAL_DIR, CanonicalMcp, ConfigType, RootPath, Scope, SettablePaths, ToolFile,
)
from core.errors import ParseError

from .config_type_handler import ConfigTypeHandler


def load_json_document(content: Optional[str], label: str) -> Dict[str, Any]:
    """Parse a JSON object, treating missing/blank content as ``{}``."""
    if content is None or not content.strip():
        return {}
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}", label)
    if not isinstance(data, dict):
        raise ParseError("Expected a JSON object", label)
    return data


def dump_json_document(data: Dict[str, Any]) -> str:
    return json.dumps(data, indent=2) + '\n'


class McpJsonHandler(ConfigTypeHandler):
    """MCP servers stored under ``servers_key`` in a JSON document."""

    file_extension = '.json'
    mcp_file: RootPath = None
    global_mcp_file: Optional[RootPath] = None
    servers_key = 'mcpServers'
    merge_into_existing = False
    merge_global = False

    @property
    def config_type(self) -> ConfigType:
        return ConfigType.MCP

    @property
    def supports_global(self) -> bool:
        return self.global_mcp_file is not None

    def merges(self, scope: Scope) -> bool:
        return self.merge_into_existing or (self.merge_global and scope == Scope.GLOBAL)

    def is_deletable(self, scope: Scope) -> bool:
        return not self.merges(scope)

    def settable_paths(self, scope: Scope) -> SettablePaths:
        return SettablePaths(root=self.global_mcp_file if scope == Scope.GLOBAL
                             else self.mcp_file)

    def from_canonical(self, canonical: CanonicalMcp, base_dir: Path,
                       scope: Scope = Scope.PROJECT,
                       existing: Optional[str] = None) -> List[ToolFile]:
        if not self.is_targeted(canonical):
            return []
        paths = self.get_settable_paths(scope)
        servers = {name: self.export_server(server)
                   for name, server in canonical.servers_for(self.tool_name).items()}

        document = {}
        if self.merges(scope):
            document = load_json_document(existing, f"{paths.root.dir}/{paths.root.file}")
        document[self.servers_key] = servers

        return [ToolFile(base_dir, paths.root.dir, paths.root.file, dump_json_document(document),
                         deletable=self.is_deletable(scope), root=True)]

    def to_canonical(self, tool_file: ToolFile) -> CanonicalMcp:
        document = load_json_document(tool_file.content, tool_file.relative_path)
        servers = document.get(self.servers_key) or {}
        return CanonicalMcp(
            servers={name: self.import_server(server) for name, server in servers.items()
                     if isinstance(server, dict)},
            relative_dir_path=CANONICAL_DIR,
            relative_file_path=MCP_FILE,
        )

    def export_server(self, server: Dict[str, Any]) -> Dict[str, Any]:
        """Canonical server descriptor -> tool descriptor."""
        return dict(server)

    def import_server(self, server: Dict[str, Any]) -> Dict[str, Any]:
        """Tool descriptor -> canonical server descriptor."""
        return dict(server)
