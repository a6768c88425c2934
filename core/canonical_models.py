"""
Canonical data models for the sync engine.

These are the tool-agnostic representations every adapter converts to and
from. Each canonical artifact knows where it lives inside the canonical
source tree (``.agentsync/``) and carries per-tool extension blocks as
metadata keyed by tool id, e.g. a rule's ``cursor: {alwaysApply: true}``
block is stored as ``rule.get_metadata('cursor')``.

Tool-side artifacts are plain ``ToolFile`` values: a path plus rendered
content. Skills use ``ToolDir`` which flattens into several ToolFiles.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ValidationError


CANONICAL_DIR = '.agentsync'
WILDCARD = '*'


class ConfigType(Enum):
    """Artifact kinds (features) the engine can sync."""
    RULES = "rules"
    IGNORE = "ignore"
    MCP = "mcp"
    COMMANDS = "commands"
    SUBAGENTS = "subagents"
    SKILLS = "skills"
    HOOKS = "hooks"


class Scope(Enum):
    """Placement of generated files: repository-local or user-home-local."""
    PROJECT = "project"
    GLOBAL = "global"


class IgnoreAction(Enum):
    READ = "read"
    WRITE = "write"
    EDIT = "edit"


IGNORE_ACTION_ORDER = [IgnoreAction.READ, IgnoreAction.WRITE, IgnoreAction.EDIT]


class CanonicalArtifact:
    """
    Base class for canonical artifacts.

    Identity is (base_dir, relative_dir_path, relative_file_path). The
    relative paths are posix-style and relative to base_dir.
    """

    config_type: ConfigType = None

    def __init__(self, base_dir: Path = Path('.'), relative_dir_path: str = '',
                 relative_file_path: str = '', targets: Optional[List[str]] = None):
        self.base_dir = Path(base_dir)
        self.relative_dir_path = relative_dir_path
        self.relative_file_path = relative_file_path
        self.targets: List[str] = list(targets) if targets is not None else [WILDCARD]
        self.metadata: Dict[str, Any] = {}

    def add_metadata(self, key: str, value: Any):
        """Store a tool-specific extension block."""
        self.metadata[key] = value

    def get_metadata(self, key: str, default: Any = None) -> Any:
        return self.metadata.get(key, default)

    def has_metadata(self, key: str) -> bool:
        return key in self.metadata

    @property
    def full_path(self) -> Path:
        return self.base_dir / self.relative_dir_path / self.relative_file_path

    @property
    def stem(self) -> str:
        """File name without its last extension, keeping any sub-directory."""
        name = self.relative_file_path
        return name[:-len('.md')] if name.endswith('.md') else os.path.splitext(name)[0]

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}("
                f"{self.relative_dir_path}/{self.relative_file_path})")


class CanonicalRule(CanonicalArtifact):
    """A coding-agent instruction file."""

    config_type = ConfigType.RULES

    def __init__(self, body: str, root: bool = False, description: str = '',
                 globs: Optional[List[str]] = None, **kwargs):
        super().__init__(**kwargs)
        self.body = body
        self.root = root
        self.description = description
        self.globs: List[str] = list(globs) if globs else []


class CanonicalCommand(CanonicalArtifact):
    """A slash command prompt."""

    config_type = ConfigType.COMMANDS

    def __init__(self, body: str, description: str, **kwargs):
        super().__init__(**kwargs)
        self.body = body
        self.description = description


class CanonicalSubagent(CanonicalArtifact):
    """A named subagent definition."""

    config_type = ConfigType.SUBAGENTS

    def __init__(self, name: str, description: str, body: str, **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.description = description
        self.body = body


class CanonicalSkill(CanonicalArtifact):
    """
    A skill directory: SKILL.md plus auxiliary files.

    ``relative_file_path`` is the directory name; ``other_files`` maps paths
    relative to the skill directory to their content.
    """

    config_type = ConfigType.SKILLS

    def __init__(self, name: str, description: str, body: str,
                 other_files: Optional[Dict[str, str]] = None, **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.description = description
        self.body = body
        self.other_files: Dict[str, str] = dict(other_files or {})

    @property
    def dir_name(self) -> str:
        return self.relative_file_path


@dataclass
class IgnoreRule:
    path: str
    actions: List[IgnoreAction] = field(default_factory=lambda: [IgnoreAction.READ])


class CanonicalIgnore(CanonicalArtifact):
    """Ignore patterns with per-pattern action tags."""

    config_type = ConfigType.IGNORE

    def __init__(self, rules: List[IgnoreRule], **kwargs):
        super().__init__(**kwargs)
        self.rules = rules

    @property
    def patterns(self) -> List[str]:
        return [rule.path for rule in self.rules]


class CanonicalMcp(CanonicalArtifact):
    """
    MCP server map.

    ``servers`` maps a server name to its raw descriptor dict (command|url,
    args, env, type, plus the canonical-only ``targets``/``description``).
    """

    config_type = ConfigType.MCP

    def __init__(self, servers: Dict[str, Dict[str, Any]], **kwargs):
        super().__init__(**kwargs)
        self.servers = servers

    def servers_for(self, tool: str) -> Dict[str, Dict[str, Any]]:
        """Servers targeted at ``tool`` with canonical-only keys stripped."""
        selected = {}
        for name, server in self.servers.items():
            targets = server.get('targets')
            if targets is None:
                targets = [WILDCARD]
            if WILDCARD not in targets and tool not in targets:
                continue
            selected[name] = {k: v for k, v in server.items()
                              if k not in ('targets', 'description')}
        return selected


class CanonicalHooks(CanonicalArtifact):
    """Canonical hook map keyed by camelCase event name."""

    config_type = ConfigType.HOOKS

    def __init__(self, hooks: Dict[str, List[Dict[str, Any]]], version: int = 1,
                 **kwargs):
        super().__init__(**kwargs)
        self.hooks = hooks
        self.version = version

    def hooks_for(self, tool: str, supported_events: List[str]) -> Dict[str, List[Dict[str, Any]]]:
        """Shared hooks filtered to ``supported_events``, overlaid by the tool's own block."""
        merged = {event: defs for event, defs in self.hooks.items()
                  if event in supported_events}
        override = self.get_metadata(tool) or {}
        merged.update(override.get('hooks') or {})
        return merged


@dataclass(frozen=True)
class RootPath:
    dir: str
    file: str


@dataclass(frozen=True)
class NonRootPath:
    dir: str


@dataclass(frozen=True)
class SettablePaths:
    """Where a (tool, config type, scope) places its files."""
    root: Optional[RootPath] = None
    non_root: Optional[NonRootPath] = None


@dataclass
class ToolFile:
    """
    A tool-side file, rendered in the tool's native format.

    ``deletable`` is False for shared documents (e.g. settings files) that
    the engine merges into but does not own.
    """
    base_dir: Path
    relative_dir_path: str
    relative_file_path: str
    content: str
    deletable: bool = True
    root: bool = False

    @property
    def relative_path(self) -> str:
        return str(Path(self.relative_dir_path) / self.relative_file_path)

    @property
    def full_path(self) -> Path:
        """Absolute destination path; refuses paths escaping base_dir."""
        base = Path(self.base_dir).resolve()
        target = (base / self.relative_dir_path / self.relative_file_path).resolve()
        if target != base and base not in target.parents:
            raise ValidationError(
                f"Path traversal detected: {self.relative_path} escapes {base}",
                self.relative_path,
            )
        return target


@dataclass
class ToolDir:
    """A tool-side directory (skills): main file plus auxiliary files."""
    base_dir: Path
    relative_dir_path: str
    dir_name: str
    main_file_name: str
    main_content: str
    other_files: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not self.dir_name or '/' in self.dir_name or '\\' in self.dir_name \
                or self.dir_name in ('.', '..'):
            raise ValidationError(f"Invalid directory name: {self.dir_name!r}")

    @property
    def dir_path(self) -> str:
        return str(Path(self.relative_dir_path) / self.dir_name)

    def to_files(self) -> List[ToolFile]:
        files = [ToolFile(self.base_dir, self.dir_path, self.main_file_name, self.main_content)]
        for rel_path in sorted(self.other_files):
            files.append(ToolFile(self.base_dir, self.dir_path, rel_path,
                                  self.other_files[rel_path]))
        return files
