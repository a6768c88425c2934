"""
Tool adapter interface.

One ToolAdapter exists per external AI coding tool. It coordinates the
per-config-type handlers (``adapters.shared.config_type_handler``) and is
what the registry stores. Conversions are delegated to the handler for the
requested config type; the adapter only adds warning bookkeeping.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from .canonical_models import CanonicalArtifact, ConfigType, Scope, ToolFile


class ToolAdapter(ABC):
    """
    Abstract base class for tool adapters.

    Subclasses populate ``self._handlers`` in ``__init__`` and name the tool
    via ``tool_name``.
    """

    def __init__(self):
        self.warnings: List[str] = []
        self._handlers: Dict[ConfigType, object] = {}

    @property
    @abstractmethod
    def tool_name(self) -> str:
        """Unique tool id used in ``targets`` (e.g. 'claudecode')."""

    @property
    def display_name(self) -> str:
        return self.tool_name

    @property
    def supported_config_types(self) -> List[ConfigType]:
        return list(self._handlers.keys())

    def supports(self, config_type: ConfigType, scope: Optional[Scope] = None) -> bool:
        handler = self._handlers.get(config_type)
        if handler is None:
            return False
        return scope is None or handler.supports_scope(scope)

    def get_handler(self, config_type: ConfigType):
        """Get handler for config type."""
        if config_type not in self._handlers:
            raise ValueError(f"Unsupported config type for {self.tool_name}: {config_type}")
        return self._handlers[config_type]

    def from_canonical(self, canonical: CanonicalArtifact, config_type: ConfigType,
                       base_dir: Path, scope: Scope = Scope.PROJECT,
                       existing: Optional[str] = None) -> List[ToolFile]:
        """Convert canonical to tool files (delegates to handler)."""
        handler = self.get_handler(config_type)
        handler.warnings = []
        files = handler.from_canonical(canonical, base_dir, scope, existing)
        self.warnings = list(handler.warnings)
        return files

    def to_canonical(self, tool_file: ToolFile, config_type: ConfigType) -> CanonicalArtifact:
        """Convert a tool file to canonical (delegates to handler)."""
        handler = self.get_handler(config_type)
        handler.warnings = []
        canonical = handler.to_canonical(tool_file)
        self.warnings = list(handler.warnings)
        return canonical

    def get_conversion_warnings(self) -> List[str]:
        return self.warnings
