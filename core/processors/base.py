"""
Feature processor base.

One processor handles one config type for one base directory. A generate
run walks the same steps for every selected tool:

    load canonical -> resolve targets -> filter -> convert
    -> load existing (directory scan) -> reconcile -> apply -> report

Import runs the mirror sequence for a single tool: load existing tool
files -> to_canonical -> serialize into .agentsync/ -> reconcile -> apply.
Import never deletes canonical files.
"""

from pathlib import Path
from typing import Dict, List, Optional

from core.canonical_io import CanonicalStore, LoadResult, canonical_files, read_text
from core.canonical_models import CanonicalArtifact, ConfigType, Scope, ToolFile
from core.config import SyncConfig
from core.context import RunContext
from core.errors import ParseError, UnsupportedOperationError, ValidationError
from core.reconcile import ReconcileResult, apply_result, reconcile
from core.registry import ToolRegistry
from core.report import FeatureResult
from core.targets import features_for_target, filter_targeted, resolve_targets


class FeatureProcessor:
    """
    Generate/import driver for one config type.

    Subclasses set ``config_type`` and override the hooks they need:
    ``prepare_canonical``, ``existing_content_for``, ``load_existing`` and
    ``plan``.
    """

    config_type: ConfigType = None
    single_file = False

    def __init__(self, registry: ToolRegistry, config: SyncConfig, context: RunContext,
                 base_dir: Path):
        self.registry = registry
        self.config = config
        self.context = context
        self.base_dir = Path(base_dir)
        self.store = CanonicalStore(self.base_dir)

    @property
    def scope(self) -> Scope:
        return self.config.scope

    @property
    def output_dir(self) -> Path:
        return Path(self.config.output_dir(self.base_dir))

    # ------------------------------------------------------------------
    # Steps

    def load_canonical(self) -> LoadResult:
        return self.store.load(self.config_type)

    def prepare_canonical(self, artifacts: List[CanonicalArtifact],
                          result: FeatureResult) -> List[CanonicalArtifact]:
        """Scope-level filtering before fan-out."""
        return artifacts

    def resolve_tools(self) -> List[str]:
        tools = []
        for tool in resolve_targets(self.config.targets, self.registry, self.config_type):
            enabled = features_for_target(tool, self.config.features,
                                          self.config.feature_overrides)
            if self.config_type not in enabled:
                self.context.debug(f"{tool}: {self.config_type.value} disabled for this target")
                continue
            handler = self.registry.get_adapter(tool).get_handler(self.config_type)
            if not handler.supports_scope(self.scope):
                self.context.debug(
                    f"{tool}: {self.config_type.value} not supported in {self.scope.value} scope")
                continue
            tools.append(tool)
        return tools

    def existing_content_for(self, handler) -> Optional[str]:
        """Current content of a merge-style destination, if the kind has one."""
        if not self.single_file:
            return None
        root = handler.get_settable_paths(self.scope).root
        path = self.output_dir / root.dir / root.file
        return read_text(path) if path.is_file() else None

    def convert(self, tool: str, artifacts: List[CanonicalArtifact],
                result: FeatureResult) -> List[ToolFile]:
        """
        Fan out targeted artifacts to one tool.

        Per-artifact parse and validation failures are recorded and the artifact is
        skipped. UnsupportedOperationError propagates to the caller.
        """
        adapter = self.registry.get_adapter(tool)
        handler = adapter.get_handler(self.config_type)
        existing = self.existing_content_for(handler)
        generated: List[ToolFile] = []

        for artifact in filter_targeted(artifacts, handler):
            try:
                tool_files = adapter.from_canonical(artifact, self.config_type,
                                                    self.output_dir, self.scope, existing)
                for tool_file in tool_files:
                    tool_file.full_path  # raises on path traversal
                    validation = handler.validate(tool_file)
                    if not validation.success:
                        raise ValidationError(validation.error, tool_file.relative_path)
            except (ParseError, ValidationError) as e:
                result.errors.append(e)
                self.context.error(f"{tool}: {e}")
                continue

            for warning in adapter.get_conversion_warnings():
                self._warn(result, f"{tool}: {warning}")
            generated.extend(tool_files)
        return generated

    def load_existing(self, handler) -> List[ToolFile]:
        """Scan the tool's declared paths for files already on disk."""
        paths = handler.get_settable_paths(self.scope)
        found: Dict[Path, ToolFile] = {}
        deletable = handler.is_deletable(self.scope)

        if paths.root:
            path = self.output_dir / paths.root.dir / paths.root.file
            if path.is_file():
                found[path] = ToolFile(self.output_dir, paths.root.dir, paths.root.file,
                                       read_text(path), deletable=deletable, root=True)

        if paths.non_root:
            directory = self.output_dir / paths.non_root.dir
            if directory.is_dir():
                for path in sorted(directory.rglob('*')):
                    relative = path.relative_to(directory).as_posix()
                    if path in found or not path.is_file() or not handler.is_tool_file(relative):
                        continue
                    found[path] = ToolFile(self.output_dir, paths.non_root.dir, relative,
                                           read_text(path), deletable=deletable)

        return list(found.values())

    def plan(self, generated: List[ToolFile], existing: List[ToolFile]) -> ReconcileResult:
        return reconcile(generated, existing, delete=self.config.delete)

    def managed_dirs(self, handler) -> List[Path]:
        paths = handler.get_settable_paths(self.scope)
        if paths.non_root:
            return [self.output_dir / paths.non_root.dir]
        return []

    # ------------------------------------------------------------------
    # Entry points

    def generate(self) -> FeatureResult:
        """
        Run the generate pipeline for every selected tool.

        Raises:
            FilesystemError: On I/O failure; changes of the failing tool are rolled back
        """
        result = FeatureResult(self.config_type)
        loaded = self.load_canonical()
        for error in loaded.errors:
            result.errors.append(error)
            self.context.error(str(error))
        for warning in loaded.warnings:
            self._warn(result, warning)

        artifacts = self.prepare_canonical(loaded.artifacts, result)

        # Convert for every tool first: tools can share an output path (AGENTS.md)
        # and one tool's output is never another tool's orphan.
        converted: Dict[str, List[ToolFile]] = {}
        for tool in self.resolve_tools():
            try:
                converted[tool] = self.convert(tool, artifacts, result)
            except UnsupportedOperationError as e:
                result.errors.append(e)
                self.context.error(str(e))
        claimed = {tool_file.full_path for files in converted.values() for tool_file in files}

        for tool, generated in converted.items():
            handler = self.registry.get_adapter(tool).get_handler(self.config_type)
            existing = self.load_existing(handler)
            plan = self.plan(generated, existing)
            self._keep_claimed(plan, claimed)
            self._apply(plan, handler, result)
            self.context.debug(
                f"{tool}/{self.config_type.value}: {len(plan.to_write)} to write, "
                f"{len(plan.to_delete)} to delete, {len(plan.unchanged)} unchanged")

        return result

    def import_tool(self, tool: str) -> FeatureResult:
        """
        Convert one tool's files on disk into canonical files.

        Raises:
            FilesystemError: On I/O failure
        """
        result = FeatureResult(self.config_type)
        adapter = self.registry.get_adapter(tool)
        if adapter is None or not adapter.supports(self.config_type):
            return result
        handler = adapter.get_handler(self.config_type)
        if not handler.supports_scope(self.scope):
            self.context.debug(
                f"{tool}: {self.config_type.value} not supported in {self.scope.value} scope")
            return result

        canonicals: List[CanonicalArtifact] = []
        for item in self.import_units(handler):
            try:
                canonical = adapter.to_canonical(item, self.config_type)
            except (ParseError, ValidationError) as e:
                result.errors.append(e)
                self.context.error(f"{tool}: {e}")
                continue
            for warning in adapter.get_conversion_warnings():
                self._warn(result, f"{tool}: {warning}")
            if self.is_empty(canonical):
                continue
            canonical.base_dir = self.base_dir
            self.place_imported(canonical)
            canonicals.append(canonical)

        generated: List[ToolFile] = []
        for canonical in canonicals:
            for rel_dir, rel_file, content in canonical_files(canonical):
                generated.append(ToolFile(self.base_dir, rel_dir, rel_file, content))

        existing = []
        for tool_file in generated:
            path = tool_file.full_path
            if path.is_file():
                existing.append(ToolFile(self.base_dir, tool_file.relative_dir_path,
                                         tool_file.relative_file_path, read_text(path),
                                         deletable=False))

        plan = reconcile(generated, existing, delete=False)
        self._apply(plan, None, result)
        return result

    def import_units(self, handler) -> list:
        """Units handed to to_canonical during import (files by default)."""
        return self.load_existing(handler)

    def is_empty(self, canonical: CanonicalArtifact) -> bool:
        return False

    def place_imported(self, canonical: CanonicalArtifact):
        """Adjust where an imported artifact is written inside .agentsync/."""

    # ------------------------------------------------------------------

    def _keep_claimed(self, plan: ReconcileResult, claimed):
        """Drop deletions of paths another tool generates in this run."""
        kept = [tool_file for tool_file in plan.to_delete if tool_file.full_path in claimed]
        if kept:
            plan.to_delete = [f for f in plan.to_delete if f.full_path not in claimed]
            plan.unchanged.extend(kept)

    def _apply(self, plan: ReconcileResult, handler, result: FeatureResult):
        prune = self.managed_dirs(handler) if handler is not None else None
        written, deleted = apply_result(plan, self.context, prune_within=prune)
        result.created += plan.created
        result.overwritten += plan.overwritten
        result.skipped += len(plan.unchanged)
        result.deleted += len(deleted)
        result.written_paths.extend(written)
        result.deleted_paths.extend(deleted)

    def _warn(self, result: FeatureResult, message: str):
        result.warnings.append(message)
        self.context.warn(message)
