"""
Per-feature and per-run results handed back to the CLI/GUI.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from .canonical_models import ConfigType
from .errors import SyncError, UnsupportedOperationError


@dataclass
class FeatureResult:
    """Outcome of one feature (config type) for one base directory."""
    config_type: ConfigType
    created: int = 0
    overwritten: int = 0
    skipped: int = 0
    deleted: int = 0
    written_paths: List[Path] = field(default_factory=list)
    deleted_paths: List[Path] = field(default_factory=list)
    errors: List[SyncError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def written(self) -> int:
        return self.created + self.overwritten

    @property
    def fatal_errors(self) -> List[SyncError]:
        return [e for e in self.errors if isinstance(e, UnsupportedOperationError)]

    def merge(self, other: 'FeatureResult'):
        self.created += other.created
        self.overwritten += other.overwritten
        self.skipped += other.skipped
        self.deleted += other.deleted
        self.written_paths.extend(other.written_paths)
        self.deleted_paths.extend(other.deleted_paths)
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    def summary(self) -> str:
        return (f"{self.config_type.value}: {self.created} created, "
                f"{self.overwritten} overwritten, {self.skipped} unchanged, "
                f"{self.deleted} deleted")


@dataclass
class SyncReport:
    """All feature results of a run, keyed by (base_dir, config type)."""
    dry_run: bool = False
    results: Dict[Tuple[str, ConfigType], FeatureResult] = field(default_factory=dict)

    def add(self, base_dir: Path, result: FeatureResult):
        key = (str(base_dir), result.config_type)
        if key in self.results:
            self.results[key].merge(result)
        else:
            self.results[key] = result

    def get(self, config_type: ConfigType, base_dir: Path = None) -> FeatureResult:
        """Result for a feature; merged across base dirs when base_dir is None."""
        merged = FeatureResult(config_type)
        for (result_dir, result_type), result in self.results.items():
            if result_type == config_type and (base_dir is None or result_dir == str(base_dir)):
                merged.merge(result)
        return merged

    @property
    def total_written(self) -> int:
        return sum(r.written for r in self.results.values())

    @property
    def total_deleted(self) -> int:
        return sum(r.deleted for r in self.results.values())

    @property
    def written_paths(self) -> List[Path]:
        return [p for r in self.results.values() for p in r.written_paths]

    @property
    def deleted_paths(self) -> List[Path]:
        return [p for r in self.results.values() for p in r.deleted_paths]

    @property
    def errors(self) -> List[SyncError]:
        return [e for r in self.results.values() for e in r.errors]

    @property
    def warnings(self) -> List[str]:
        return [w for r in self.results.values() for w in r.warnings]

    @property
    def has_fatal_errors(self) -> bool:
        return any(r.fatal_errors for r in self.results.values())
