"""
Claude Code skill handler.

A skill is a directory ``.claude/skills/<name>/`` holding ``SKILL.md``
(frontmatter ``name``, ``description`` plus Claude fields such as
``allowed-tools``) and any auxiliary files, copied verbatim.
"""

from pathlib import Path
from typing import List, Optional

from core.canonical_io import SKILL_FILE, SKILLS_DIR
from core.canonical_models import (
    CanonicalSkill, ConfigType, NonRootPath, Scope, SettablePaths, ToolDir, ToolFile,
)
from core.frontmatter import parse_frontmatter, stringify_frontmatter
from adapters.shared.config_type_handler import ConfigTypeHandler


class ClaudeSkillHandler(ConfigTypeHandler):
    """Handler for Claude Code skill directories."""

    tool_name = 'claudecode'
    supports_global = True
    skills_dir = '.claude/skills'

    @property
    def config_type(self) -> ConfigType:
        return ConfigType.SKILLS

    def settable_paths(self, scope: Scope) -> SettablePaths:
        return SettablePaths(non_root=NonRootPath(self.skills_dir))

    def from_canonical(self, canonical: CanonicalSkill, base_dir: Path,
                       scope: Scope = Scope.PROJECT,
                       existing: Optional[str] = None) -> List[ToolFile]:
        if not self.is_targeted(canonical):
            return []
        paths = self.get_settable_paths(scope)
        frontmatter = {'name': canonical.name, 'description': canonical.description}
        frontmatter.update(canonical.get_metadata(self.tool_name) or {})

        tool_dir = ToolDir(base_dir, paths.non_root.dir, canonical.dir_name, SKILL_FILE,
                           stringify_frontmatter(frontmatter, canonical.body),
                           canonical.other_files)
        return tool_dir.to_files()

    def to_canonical(self, tool_dir: ToolDir) -> CanonicalSkill:
        label = f"{tool_dir.dir_path}/{tool_dir.main_file_name}"
        frontmatter, body = parse_frontmatter(tool_dir.main_content, label)
        name = frontmatter.pop('name', None) or tool_dir.dir_name
        description = frontmatter.pop('description', None) or ''

        skill = CanonicalSkill(
            name=str(name),
            description=str(description),
            body=body,
            other_files=tool_dir.other_files,
            relative_dir_path=SKILLS_DIR,
            relative_file_path=tool_dir.dir_name,
        )
        if frontmatter:
            skill.add_metadata(self.tool_name, frontmatter)
        return skill
