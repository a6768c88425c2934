"""
Shared base for markdown rule handlers.

Most tools store rules as markdown: one primary instructions file (root)
plus a directory of per-topic files (nonRoot). Subclasses declare the
paths and, where the tool has frontmatter, override ``render_non_root`` and
``parse_non_root``.

Tools without a dedicated root file set ``fold_root_into_dir`` so the root
rule is written into the nonRoot directory like any other rule.
"""

from pathlib import Path
from typing import List, Optional

from core.canonical_io import ROOT_RULE_FILE, RULES_DIR
from core.canonical_models import (
    CanonicalRule, ConfigType, NonRootPath, RootPath, Scope, SettablePaths, ToolFile,
)
from core.frontmatter import parse_frontmatter

from .config_type_handler import ConfigTypeHandler

DEFAULT_ROOT_GLOBS = ['**/*']


class MarkdownRuleHandler(ConfigTypeHandler):
    """Plain markdown rules; subclasses set the path attributes."""

    root_path: Optional[RootPath] = None
    non_root_dir: Optional[str] = None
    global_root_path: Optional[RootPath] = None
    fold_root_into_dir = False

    @property
    def config_type(self) -> ConfigType:
        return ConfigType.RULES

    @property
    def supports_global(self) -> bool:
        return self.global_root_path is not None

    def settable_paths(self, scope: Scope) -> SettablePaths:
        if scope == Scope.GLOBAL:
            return SettablePaths(root=self.global_root_path)
        return SettablePaths(
            root=self.root_path,
            non_root=NonRootPath(self.non_root_dir) if self.non_root_dir else None,
        )

    def file_name(self, rule: CanonicalRule) -> str:
        return f"{rule.stem}{self.file_extension}"

    def from_canonical(self, canonical: CanonicalRule, base_dir: Path,
                       scope: Scope = Scope.PROJECT,
                       existing: Optional[str] = None) -> List[ToolFile]:
        if not self.is_targeted(canonical):
            return []

        paths = self.get_settable_paths(scope)
        if canonical.root and paths.root:
            return [ToolFile(base_dir, paths.root.dir, paths.root.file,
                             self.render_root(canonical), root=True)]
        if canonical.root and not (self.fold_root_into_dir and paths.non_root):
            raise self.unsupported(f"root rules are not supported in {scope.value} scope",
                                   canonical.relative_file_path)
        if not paths.non_root:
            raise self.unsupported(f"non-root rules are not supported in {scope.value} scope",
                                   canonical.relative_file_path)

        return [ToolFile(base_dir, paths.non_root.dir, self.file_name(canonical),
                         self.render_non_root(canonical), root=canonical.root)]

    def render_root(self, rule: CanonicalRule) -> str:
        return f"{rule.body}\n"

    def render_non_root(self, rule: CanonicalRule) -> str:
        return f"{rule.body}\n"

    def to_canonical(self, tool_file: ToolFile) -> CanonicalRule:
        if tool_file.root and not self.fold_root_into_dir:
            _, body = parse_frontmatter(tool_file.content, tool_file.relative_path)
            return CanonicalRule(
                body=body,
                root=True,
                globs=list(DEFAULT_ROOT_GLOBS),
                relative_dir_path=RULES_DIR,
                relative_file_path=ROOT_RULE_FILE,
            )

        rule = self.parse_non_root(tool_file)
        rule.relative_dir_path = RULES_DIR
        rule.relative_file_path = self.canonical_file_name(tool_file.relative_file_path)
        return rule

    def parse_non_root(self, tool_file: ToolFile) -> CanonicalRule:
        frontmatter, body = parse_frontmatter(tool_file.content, tool_file.relative_path)
        description = frontmatter.get('description') or ''
        return CanonicalRule(body=body, description=str(description))
