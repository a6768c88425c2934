"""
Codex CLI MCP handler.

Codex reads servers from ``~/.codex/config.toml`` only:

[mcp_servers.github]
command = "npx"
args = ["-y", "@modelcontextprotocol/server-github"]
enabled_tools = ["search_issues"]

Everything else in config.toml is kept, so the file is never deleted.
Key mapping (canonical -> codex):
- disabled: true -> enabled = false
- enabledTools -> enabled_tools
- disabledTools -> disabled_tools
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from core.canonical_io import MCP_FILE
from core.canonical_models import (
    CANONICAL_DIR, CanonicalMcp, ConfigType, RootPath, Scope, SettablePaths, ToolFile,
)
from adapters.shared.config_type_handler import ConfigTypeHandler
from adapters.shared.toml_utils import dump_toml_document, load_toml_document

CANONICAL_TO_CODEX_KEYS = {
    'enabledTools': 'enabled_tools',
    'disabledTools': 'disabled_tools',
}

CODEX_TO_CANONICAL_KEYS = {v: k for k, v in CANONICAL_TO_CODEX_KEYS.items()}


class CodexMcpHandler(ConfigTypeHandler):
    """Handler for the ``mcp_servers`` table of Codex config.toml."""

    tool_name = 'codexcli'
    supports_project = False
    supports_global = True
    deletable = False
    file_extension = '.toml'
    config_file = RootPath('.codex', 'config.toml')

    @property
    def config_type(self) -> ConfigType:
        return ConfigType.MCP

    def settable_paths(self, scope: Scope) -> SettablePaths:
        return SettablePaths(root=self.config_file)

    def from_canonical(self, canonical: CanonicalMcp, base_dir: Path,
                       scope: Scope = Scope.PROJECT,
                       existing: Optional[str] = None) -> List[ToolFile]:
        if not self.is_targeted(canonical):
            return []
        paths = self.get_settable_paths(scope)
        config = load_toml_document(existing, f"{paths.root.dir}/{paths.root.file}")
        config['mcp_servers'] = {name: self._to_codex(server)
                                 for name, server in canonical.servers_for(self.tool_name).items()}
        return [ToolFile(base_dir, paths.root.dir, paths.root.file, dump_toml_document(config),
                         deletable=False, root=True)]

    def to_canonical(self, tool_file: ToolFile) -> CanonicalMcp:
        config = load_toml_document(tool_file.content, tool_file.relative_path)
        servers = config.get('mcp_servers') or {}
        return CanonicalMcp(
            servers={name: self._from_codex(server) for name, server in servers.items()
                     if isinstance(server, dict)},
            relative_dir_path=CANONICAL_DIR,
            relative_file_path=MCP_FILE,
        )

    def _to_codex(self, server: Dict[str, Any]) -> Dict[str, Any]:
        converted = {}
        for key, value in server.items():
            if key == 'disabled':
                if value is True:
                    converted['enabled'] = False
            else:
                converted[CANONICAL_TO_CODEX_KEYS.get(key, key)] = value
        return converted

    def _from_codex(self, server: Dict[str, Any]) -> Dict[str, Any]:
        converted = {}
        for key, value in server.items():
            if key == 'enabled':
                if value is False:
                    converted['disabled'] = True
            else:
                converted[CODEX_TO_CANONICAL_KEYS.get(key, key)] = value
        return converted
