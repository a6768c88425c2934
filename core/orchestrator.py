"""
Sync orchestrator.

Runs the feature processors for every base directory and every enabled
feature, in ConfigType order, and collects their results into a
SyncReport for the CLI/GUI to present.

- Per-artifact errors and per-(tool, feature) unsupported operations end
  up in the report; the run continues.
- FilesystemError propagates and stops the run.
- Configuration errors (unknown target/feature) are raised before any
  file is touched.
"""

from pathlib import Path
from typing import List, Optional

from .canonical_models import ConfigType
from .config import SyncConfig
from .context import RunContext
from .errors import ConfigError
from .processors import PROCESSORS
from .registry import ToolRegistry
from .report import SyncReport
from .targets import resolve_features, resolve_targets


class SyncOrchestrator:
    """
    Entry point for generate and import runs.

    Args:
        config: Resolved run configuration
        registry: Registered tool adapters
        context: Logging and dry-run switches (created from config if omitted)
    """

    def __init__(self, config: SyncConfig, registry: ToolRegistry,
                 context: Optional[RunContext] = None):
        self.config = config
        self.registry = registry
        self.context = context or RunContext(verbose=config.verbose, silent=config.silent,
                                             dry_run=config.dry_run)

    def enabled_features(self) -> List[ConfigType]:
        """Global features plus any named only in per-target overrides."""
        enabled = set(resolve_features(self.config.features))
        for features in self.config.feature_overrides.values():
            enabled.update(resolve_features(features))
        return [ct for ct in ConfigType if ct in enabled]

    def validate(self):
        """
        Fail fast on configuration problems.

        Raises:
            ConfigError: Unknown targets/features or unknown override tools
        """
        self.config.validate()
        resolve_targets(self.config.targets, self.registry)
        for tool in self.config.feature_overrides:
            if tool not in self.registry:
                raise ConfigError(f"Unknown target '{tool}' in per-target features")

    def generate(self) -> SyncReport:
        """
        Generate tool files from the canonical source of every base dir.

        Raises:
            ConfigError: Before any work on invalid configuration
            FilesystemError: On I/O failure
        """
        self.validate()
        report = SyncReport(dry_run=self.context.dry_run)

        for base_dir in self.config.base_dirs:
            base_dir = Path(base_dir)
            self.context.info(f"Generating from {base_dir / '.agentsync'}")
            if self.context.dry_run:
                self.context.info("Mode: DRY RUN (no changes will be made)")

            for config_type in self.enabled_features():
                processor = PROCESSORS[config_type](self.registry, self.config,
                                                    self.context, base_dir)
                result = processor.generate()
                report.add(base_dir, result)
                if result.written or result.deleted:
                    self.context.info(f"  {result.summary()}")
                else:
                    self.context.debug(result.summary())

        return report

    def import_tool(self, tool: str, features: Optional[List[str]] = None) -> SyncReport:
        """
        Import one tool's files into the canonical source of the first base dir.

        Raises:
            ConfigError: If ``tool`` is not registered
            FilesystemError: On I/O failure
        """
        if tool not in self.registry:
            raise ConfigError(f"Unknown target '{tool}'. Known targets: "
                              f"{', '.join(self.registry.list_tools())}")
        base_dir = Path(self.config.base_dirs[0])
        config_types = resolve_features(features) if features else self.enabled_features()
        report = SyncReport(dry_run=self.context.dry_run)

        self.context.info(f"Importing {tool} into {base_dir / '.agentsync'}")
        for config_type in config_types:
            processor = PROCESSORS[config_type](self.registry, self.config,
                                                self.context, base_dir)
            result = processor.import_tool(tool)
            report.add(base_dir, result)
            if result.written:
                self.context.info(f"  {result.summary()}")

        return report
