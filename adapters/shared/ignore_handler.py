"""
Shared base for gitignore-style ignore files (.cursorignore, .geminiignore, ...).

These formats have no notion of actions, so only the pattern is written.
Rules that also carried write/edit actions are still emitted (a file the
tool cannot read it cannot edit either) and a warning names what was lost.
"""

from pathlib import Path
from typing import List, Optional

from core.canonical_io import IGNORE_TEXT_FILE
from core.canonical_models import (
    CANONICAL_DIR, CanonicalIgnore, ConfigType, IgnoreAction, RootPath, Scope,
    SettablePaths, ToolFile,
)
from core.ignore_rules import parse_ignore_text

from .config_type_handler import ConfigTypeHandler


class IgnoreFileHandler(ConfigTypeHandler):
    """One ignore file with one bare pattern per line."""

    ignore_file: RootPath = None

    @property
    def config_type(self) -> ConfigType:
        return ConfigType.IGNORE

    def settable_paths(self, scope: Scope) -> SettablePaths:
        return SettablePaths(root=self.ignore_file)

    def from_canonical(self, canonical: CanonicalIgnore, base_dir: Path,
                       scope: Scope = Scope.PROJECT,
                       existing: Optional[str] = None) -> List[ToolFile]:
        if not self.is_targeted(canonical):
            return []
        dropped = [rule.path for rule in canonical.rules
                   if any(a != IgnoreAction.READ for a in rule.actions)]
        if dropped:
            self.warnings.append(
                f"write/edit actions are not supported and were reduced to plain patterns: "
                f"{', '.join(dropped)}")

        paths = self.get_settable_paths(scope)
        content = '\n'.join(canonical.patterns) + '\n' if canonical.rules else ''
        return [ToolFile(base_dir, paths.root.dir, paths.root.file, content,
                         deletable=self.deletable, root=True)]

    def to_canonical(self, tool_file: ToolFile) -> CanonicalIgnore:
        rules, warnings = parse_ignore_text(tool_file.content)
        self.warnings.extend(warnings)
        return CanonicalIgnore(rules=rules, relative_dir_path=CANONICAL_DIR,
                               relative_file_path=IGNORE_TEXT_FILE)
