"""
Run configuration.

``agentsync.json`` (optional, next to ``.agentsync/``):

{
  "targets": ["claudecode", "cursor"],        # or "*"
  "features": ["rules", "mcp"],               # or "*", or {"cursor": ["rules"], "*": ["rules", "ignore"]}
  "baseDirs": ["."],
  "global": false,
  "delete": true,
  "verbose": false,
  "silent": false
}

CLI flags override file values; see ``merge_cli_overrides``.
"""

import dataclasses
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .canonical_models import WILDCARD, Scope
from .errors import ConfigError, SyncError
from .schemas import validate_model
from .targets import resolve_features

CONFIG_FILE_NAME = 'agentsync.json'


class ConfigFile(BaseModel):
    """Schema of agentsync.json."""

    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    targets: Union[str, List[str]] = Field(default_factory=lambda: [WILDCARD])
    features: Union[str, List[str], Dict[str, List[str]]] = Field(
        default_factory=lambda: [WILDCARD])
    base_dirs: List[str] = Field(default_factory=lambda: ['.'], alias='baseDirs')
    global_: bool = Field(default=False, alias='global')
    global_dir: Optional[str] = Field(default=None, alias='globalDir')
    dry_run: bool = Field(default=False, alias='dryRun')
    delete: bool = True
    verbose: bool = False
    silent: bool = False


@dataclass
class SyncConfig:
    """Resolved configuration for one run."""
    targets: List[str] = field(default_factory=lambda: [WILDCARD])
    features: List[str] = field(default_factory=lambda: [WILDCARD])
    feature_overrides: Dict[str, List[str]] = field(default_factory=dict)
    base_dirs: List[Path] = field(default_factory=lambda: [Path('.')])
    scope: Scope = Scope.PROJECT
    global_dir: Path = field(default_factory=Path.home)
    dry_run: bool = False
    delete: bool = True
    verbose: bool = False
    silent: bool = False

    def output_dir(self, base_dir: Path) -> Path:
        """Root that tool files are written under for this scope."""
        return self.global_dir if self.scope == Scope.GLOBAL else base_dir

    def validate(self):
        """
        Check feature names up front.

        Raises:
            ConfigError: On unknown feature names or an empty base dir list
        """
        resolve_features(self.features)
        for features in self.feature_overrides.values():
            resolve_features(features)
        if not self.base_dirs:
            raise ConfigError("At least one base directory is required")


def _as_list(value: Union[str, List[str]]) -> List[str]:
    return [value] if isinstance(value, str) else list(value)


def config_from_file_model(model: ConfigFile) -> SyncConfig:
    features = model.features
    overrides: Dict[str, List[str]] = {}
    if isinstance(features, dict):
        overrides = {tool: _as_list(names) for tool, names in features.items()
                     if tool != WILDCARD}
        features = features.get(WILDCARD, [WILDCARD])

    return SyncConfig(
        targets=_as_list(model.targets),
        features=_as_list(features),
        feature_overrides=overrides,
        base_dirs=[Path(d) for d in model.base_dirs],
        scope=Scope.GLOBAL if model.global_ else Scope.PROJECT,
        global_dir=Path(model.global_dir).expanduser() if model.global_dir else Path.home(),
        dry_run=model.dry_run,
        delete=model.delete,
        verbose=model.verbose,
        silent=model.silent,
    )


def load_config(path: Optional[Path] = None) -> SyncConfig:
    """
    Load configuration from ``path`` (default ``./agentsync.json``).

    A missing file yields defaults.

    Raises:
        ConfigError: If the file is not valid JSON or fails the schema
    """
    path = Path(path) if path else Path(CONFIG_FILE_NAME)
    if not path.exists():
        return SyncConfig()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON: {e}", path)
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e}", path)

    try:
        model = validate_model(ConfigFile, data, str(path))
    except SyncError as e:
        raise ConfigError(e.message, path)

    config = config_from_file_model(model)
    config.validate()
    return config


def merge_cli_overrides(config: SyncConfig, **overrides) -> SyncConfig:
    """Return a copy of ``config`` with every non-None override applied."""
    values = {key: value for key, value in overrides.items() if value is not None}
    unknown = set(values) - {f.name for f in dataclasses.fields(SyncConfig)}
    if unknown:
        raise ConfigError(f"Unknown config option(s): {', '.join(sorted(unknown))}")
    merged = dataclasses.replace(config, **values)
    merged.validate()
    return merged
