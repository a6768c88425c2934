"""
Per-(tool, config type) handler contract.

A handler is the pure conversion unit of the engine. For one tool and one
artifact kind it declares where files live and converts in both
directions. It performs no I/O: the feature processor reads whatever the
handler needs (existing merge targets, files to import) and passes it in.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from core.canonical_models import (
    WILDCARD, CanonicalArtifact, ConfigType, Scope, SettablePaths, ToolFile,
)
from core.errors import UnsupportedOperationError


@dataclass
class ValidationResult:
    success: bool
    error: Optional[str] = None


class ConfigTypeHandler(ABC):
    """
    Abstract base class for config type handlers.

    Subclasses set ``tool_name`` and ``config_type`` and implement the
    conversion pair. Class attributes declare the rest of the contract:
    - supports_project / supports_global: scopes the tool reads this kind in
    - deletable: False for shared documents merged into but not owned
    - file_extension: suffix used when scanning a nonRoot directory
    """

    tool_name: str = ''
    supports_project: bool = True
    supports_global: bool = False
    deletable: bool = True
    file_extension: str = '.md'

    def __init__(self):
        self.warnings: List[str] = []

    @property
    @abstractmethod
    def config_type(self) -> ConfigType:
        """Config type this handler converts."""

    @abstractmethod
    def settable_paths(self, scope: Scope) -> SettablePaths:
        """Paths for a supported scope (called by get_settable_paths)."""

    @abstractmethod
    def from_canonical(self, canonical: CanonicalArtifact, base_dir: Path,
                       scope: Scope = Scope.PROJECT,
                       existing: Optional[str] = None) -> List[ToolFile]:
        """
        Convert a canonical artifact to tool files.

        Args:
            canonical: Canonical artifact
            base_dir: Output root (project dir or home dir)
            scope: Project or global placement
            existing: Current content of the destination, for merge-style files

        Returns:
            Tool files; empty when the artifact is not targeted at this tool
        """

    @abstractmethod
    def to_canonical(self, tool_file: ToolFile) -> CanonicalArtifact:
        """Convert a tool file back to its canonical artifact (best effort)."""

    def get_settable_paths(self, scope: Scope) -> SettablePaths:
        """
        Declared output paths for ``scope``.

        Raises:
            UnsupportedOperationError: If the tool does not read this kind in scope
        """
        if not self.supports_scope(scope):
            raise UnsupportedOperationError(
                self.tool_name, self.config_type, f"{scope.value} scope is not supported")
        return self.settable_paths(scope)

    def supports_scope(self, scope: Scope) -> bool:
        if scope == Scope.GLOBAL:
            return self.supports_global
        return self.supports_project

    def is_deletable(self, scope: Scope) -> bool:
        """Whether files written in ``scope`` are owned (and may be deleted) by the engine."""
        return self.deletable

    def is_targeted(self, canonical: CanonicalArtifact) -> bool:
        targets = canonical.targets if canonical.targets is not None else [WILDCARD]
        return WILDCARD in targets or self.tool_name in targets

    def validate(self, tool_file: ToolFile) -> ValidationResult:
        """Tool-specific schema check; handlers with constraints override."""
        return ValidationResult(success=True)

    def is_tool_file(self, relative_file_path: str) -> bool:
        """Whether a file found under the nonRoot directory belongs to this handler."""
        return relative_file_path.endswith(self.file_extension)

    def canonical_file_name(self, relative_file_path: str) -> str:
        """Tool file name -> canonical ``.md`` name, keeping sub-directories."""
        if relative_file_path.endswith(self.file_extension):
            relative_file_path = relative_file_path[:-len(self.file_extension)]
        return f"{relative_file_path}.md"

    def get_conversion_warnings(self) -> List[str]:
        return self.warnings

    def unsupported(self, message: str, path: Optional[str] = None) -> UnsupportedOperationError:
        return UnsupportedOperationError(self.tool_name, self.config_type, message, path)
