"""
Shared base for markdown slash-command handlers.

Output: ``<commands dir>/<name><ext>`` with optional frontmatter holding the
description plus the tool's own extension block, e.g. a canonical command

---
description: Review the diff
claudecode:
  allowed-tools: Bash(git diff:*)
---

renders for Claude Code as ``description`` + ``allowed-tools``.
"""

from pathlib import Path
from typing import List, Optional

from core.canonical_io import COMMANDS_DIR
from core.canonical_models import (
    CanonicalCommand, ConfigType, NonRootPath, Scope, SettablePaths, ToolFile,
)
from core.frontmatter import parse_frontmatter, stringify_frontmatter

from .config_type_handler import ConfigTypeHandler


class MarkdownCommandHandler(ConfigTypeHandler):
    """Commands as markdown files in one directory."""

    commands_dir: str = ''
    global_commands_dir: Optional[str] = None
    with_frontmatter = True

    @property
    def config_type(self) -> ConfigType:
        return ConfigType.COMMANDS

    @property
    def supports_global(self) -> bool:
        return self.global_commands_dir is not None

    def settable_paths(self, scope: Scope) -> SettablePaths:
        directory = self.global_commands_dir if scope == Scope.GLOBAL else self.commands_dir
        return SettablePaths(non_root=NonRootPath(directory))

    def file_name(self, command: CanonicalCommand) -> str:
        return f"{command.stem}{self.file_extension}"

    def from_canonical(self, canonical: CanonicalCommand, base_dir: Path,
                       scope: Scope = Scope.PROJECT,
                       existing: Optional[str] = None) -> List[ToolFile]:
        if not self.is_targeted(canonical):
            return []
        paths = self.get_settable_paths(scope)
        return [ToolFile(base_dir, paths.non_root.dir, self.file_name(canonical),
                         self.render(canonical))]

    def render(self, command: CanonicalCommand) -> str:
        if not self.with_frontmatter:
            return f"{command.body}\n"
        frontmatter = {'description': command.description or None}
        frontmatter.update(command.get_metadata(self.tool_name) or {})
        return stringify_frontmatter(frontmatter, command.body)

    def to_canonical(self, tool_file: ToolFile) -> CanonicalCommand:
        frontmatter, body = parse_frontmatter(tool_file.content, tool_file.relative_path)
        description = frontmatter.pop('description', '') or ''
        command = CanonicalCommand(
            body=body,
            description=str(description),
            relative_dir_path=COMMANDS_DIR,
            relative_file_path=self.canonical_file_name(tool_file.relative_file_path),
        )
        if frontmatter:
            command.add_metadata(self.tool_name, frontmatter)
        return command
