"""
Shared base for markdown subagent handlers.

A subagent file is frontmatter (``name``, ``description`` plus the tool's
own fields) and the system prompt as body. The tool's fields round-trip
through the canonical extension block named after the tool.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from core.canonical_io import SUBAGENTS_DIR
from core.canonical_models import (
    CanonicalSubagent, ConfigType, NonRootPath, Scope, SettablePaths, ToolFile,
)
from core.frontmatter import parse_frontmatter, stringify_frontmatter

from .config_type_handler import ConfigTypeHandler


class MarkdownSubagentHandler(ConfigTypeHandler):
    """Subagents as markdown files in one directory."""

    agents_dir: str = ''
    global_agents_dir: Optional[str] = None

    @property
    def config_type(self) -> ConfigType:
        return ConfigType.SUBAGENTS

    @property
    def supports_global(self) -> bool:
        return self.global_agents_dir is not None

    def settable_paths(self, scope: Scope) -> SettablePaths:
        directory = self.global_agents_dir if scope == Scope.GLOBAL else self.agents_dir
        return SettablePaths(non_root=NonRootPath(directory))

    def file_name(self, subagent: CanonicalSubagent) -> str:
        return f"{subagent.stem}{self.file_extension}"

    def from_canonical(self, canonical: CanonicalSubagent, base_dir: Path,
                       scope: Scope = Scope.PROJECT,
                       existing: Optional[str] = None) -> List[ToolFile]:
        if not self.is_targeted(canonical):
            return []
        paths = self.get_settable_paths(scope)
        frontmatter = {'name': canonical.name, 'description': canonical.description}
        frontmatter.update(self.tool_fields(canonical))
        return [ToolFile(base_dir, paths.non_root.dir, self.file_name(canonical),
                         stringify_frontmatter(frontmatter, canonical.body))]

    def tool_fields(self, subagent: CanonicalSubagent) -> Dict[str, Any]:
        """Frontmatter fields written after name/description."""
        return dict(subagent.get_metadata(self.tool_name) or {})

    def to_canonical(self, tool_file: ToolFile) -> CanonicalSubagent:
        frontmatter, body = parse_frontmatter(tool_file.content, tool_file.relative_path)
        relative_file_path = self.canonical_file_name(tool_file.relative_file_path)
        name = frontmatter.pop('name', None) or Path(relative_file_path).stem
        description = frontmatter.pop('description', None) or ''

        subagent = CanonicalSubagent(
            name=str(name),
            description=str(description),
            body=body,
            relative_dir_path=SUBAGENTS_DIR,
            relative_file_path=relative_file_path,
        )
        block = self.canonical_block(frontmatter)
        if block:
            subagent.add_metadata(self.tool_name, block)
        return subagent

    def canonical_block(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Remaining tool frontmatter -> canonical extension block."""
        return fields
