"""
Shared base for JSON hooks handlers.

The canonical hooks file uses camelCase event names. Each tool keeps the
events it understands, overlays its own ``<tool>.hooks`` block and then
reshapes the result in ``export_hooks``. Handlers that merge into a
settings document only replace the keys returned by ``build_document``.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from core.canonical_io import HOOKS_FILE
from core.canonical_models import (
    CANONICAL_DIR, CanonicalHooks, ConfigType, RootPath, Scope, SettablePaths, ToolFile,
)

from .config_type_handler import ConfigTypeHandler
from .mcp_handler import dump_json_document, load_json_document

HookMap = Dict[str, List[Dict[str, Any]]]


class JsonHooksHandler(ConfigTypeHandler):
    """Hooks stored under ``hooks`` in a JSON document."""

    file_extension = '.json'
    hooks_file: RootPath = None
    supported_events: List[str] = []
    merge_into_existing = False

    @property
    def config_type(self) -> ConfigType:
        return ConfigType.HOOKS

    def is_deletable(self, scope: Scope) -> bool:
        return not self.merge_into_existing

    def settable_paths(self, scope: Scope) -> SettablePaths:
        return SettablePaths(root=self.hooks_file)

    def from_canonical(self, canonical: CanonicalHooks, base_dir: Path,
                       scope: Scope = Scope.PROJECT,
                       existing: Optional[str] = None) -> List[ToolFile]:
        if not self.is_targeted(canonical):
            return []
        paths = self.get_settable_paths(scope)
        hooks = canonical.hooks_for(self.tool_name, self.supported_events)

        document = {}
        if self.merge_into_existing:
            document = load_json_document(existing, f"{paths.root.dir}/{paths.root.file}")
        document.update(self.build_document(self.export_hooks(hooks), canonical))

        return [ToolFile(base_dir, paths.root.dir, paths.root.file, dump_json_document(document),
                         deletable=self.is_deletable(scope), root=True)]

    def build_document(self, hooks: Dict[str, Any], canonical: CanonicalHooks) -> Dict[str, Any]:
        return {'hooks': hooks}

    def to_canonical(self, tool_file: ToolFile) -> CanonicalHooks:
        document = load_json_document(tool_file.content, tool_file.relative_path)
        raw_hooks = document.get('hooks')
        version = document.get('version')
        return CanonicalHooks(
            hooks=self.import_hooks(raw_hooks if isinstance(raw_hooks, dict) else {}),
            version=version if isinstance(version, int) else 1,
            relative_dir_path=CANONICAL_DIR,
            relative_file_path=HOOKS_FILE,
        )

    def export_hooks(self, hooks: HookMap) -> Dict[str, Any]:
        """Canonical event map -> tool event map."""
        return hooks

    def import_hooks(self, hooks: Dict[str, Any]) -> HookMap:
        """Tool event map -> canonical event map."""
        return {event: [d for d in defs if isinstance(d, dict)]
                for event, defs in hooks.items() if isinstance(defs, list)}
