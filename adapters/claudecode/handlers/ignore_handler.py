"""
Claude Code ignore handler.

Claude Code has no ignore file; reads are blocked through deny rules in
``.claude/settings.local.json``:

{
  "permissions": {
    "deny": ["Read(.env)", "Edit(.env)"]
  }
}

Generated entries are merged with whatever the user already denies (sorted,
de-duplicated) and every other settings key is kept, so the file is never
deleted by the engine.
"""

from pathlib import Path
from typing import List, Optional

from core.canonical_io import IGNORE_TEXT_FILE
from core.canonical_models import (
    CANONICAL_DIR, CanonicalIgnore, ConfigType, RootPath, Scope, SettablePaths, ToolFile,
)
from core.errors import ParseError
from core.ignore_rules import WRAPPER_PATTERN, normalize_action, parse_ignore_text, wrap_patterns
from adapters.shared.config_type_handler import ConfigTypeHandler
from adapters.shared.mcp_handler import dump_json_document, load_json_document


class ClaudeIgnoreHandler(ConfigTypeHandler):
    """Handler for Claude Code permission deny rules."""

    tool_name = 'claudecode'
    deletable = False
    file_extension = '.json'
    settings_file = RootPath('.claude', 'settings.local.json')

    @property
    def config_type(self) -> ConfigType:
        return ConfigType.IGNORE

    def settable_paths(self, scope: Scope) -> SettablePaths:
        return SettablePaths(root=self.settings_file)

    def from_canonical(self, canonical: CanonicalIgnore, base_dir: Path,
                       scope: Scope = Scope.PROJECT,
                       existing: Optional[str] = None) -> List[ToolFile]:
        if not self.is_targeted(canonical):
            return []
        paths = self.get_settable_paths(scope)
        label = f"{paths.root.dir}/{paths.root.file}"
        settings = load_json_document(existing, label)

        permissions = settings.get('permissions') or {}
        if not isinstance(permissions, dict):
            raise ParseError("'permissions' must be an object", label)
        deny = [entry for entry in permissions.get('deny') or [] if isinstance(entry, str)]

        permissions = dict(permissions)
        permissions['deny'] = sorted(set(deny) | set(wrap_patterns(canonical.rules)))
        settings['permissions'] = permissions

        return [ToolFile(base_dir, paths.root.dir, paths.root.file, dump_json_document(settings),
                         deletable=False, root=True)]

    def to_canonical(self, tool_file: ToolFile) -> CanonicalIgnore:
        settings = load_json_document(tool_file.content, tool_file.relative_path)
        permissions = settings.get('permissions') or {}
        deny = permissions.get('deny') if isinstance(permissions, dict) else None

        # Only file access rules; Bash(...) and friends are not ignore patterns
        lines = []
        for entry in deny or []:
            match = WRAPPER_PATTERN.match(entry) if isinstance(entry, str) else None
            if match and normalize_action(match.group(1)) is not None:
                lines.append(entry)

        rules, warnings = parse_ignore_text('\n'.join(lines))
        self.warnings.extend(warnings)
        return CanonicalIgnore(rules=rules, relative_dir_path=CANONICAL_DIR,
                               relative_file_path=IGNORE_TEXT_FILE)
