"""
Skills processor.

Skills are directories, so reconciliation works at directory granularity:
- if any file of a generated skill directory changed, the whole directory
  is rewritten
- stale files inside a kept directory and whole orphan directories are
  deleted, and emptied directories are pruned
"""

from collections import defaultdict
from pathlib import Path
from typing import Dict, List

from core.canonical_io import SKILL_FILE, read_text
from core.canonical_models import ConfigType, ToolDir, ToolFile
from core.reconcile import ReconcileResult, WriteOp

from .base import FeatureProcessor


class SkillsProcessor(FeatureProcessor):
    config_type = ConfigType.SKILLS

    def load_existing(self, handler) -> List[ToolFile]:
        paths = handler.get_settable_paths(self.scope)
        directory = self.output_dir / paths.non_root.dir
        files: List[ToolFile] = []
        deletable = handler.is_deletable(self.scope)
        if not directory.is_dir():
            return files

        for skill_dir in sorted(p for p in directory.iterdir() if p.is_dir()):
            rel_dir = f"{paths.non_root.dir}/{skill_dir.name}"
            for path in sorted(skill_dir.rglob('*')):
                if path.is_file():
                    files.append(ToolFile(self.output_dir, rel_dir,
                                          path.relative_to(skill_dir).as_posix(),
                                          read_text(path), deletable=deletable))
        return files

    def plan(self, generated: List[ToolFile], existing: List[ToolFile]) -> ReconcileResult:
        result = super().plan(generated, existing)
        touched = {op.tool_file.relative_dir_path for op in result.to_write}
        if not touched:
            return result

        unchanged = []
        for tool_file in result.unchanged:
            if tool_file.relative_dir_path in touched:
                result.to_write.append(WriteOp(tool_file, tool_file.full_path, created=False,
                                               previous=tool_file.content))
            else:
                unchanged.append(tool_file)
        result.unchanged = unchanged
        return result

    def import_units(self, handler) -> List[ToolDir]:
        grouped: Dict[str, Dict[str, str]] = defaultdict(dict)
        for tool_file in self.load_existing(handler):
            grouped[tool_file.relative_dir_path][tool_file.relative_file_path] = tool_file.content

        units = []
        for rel_dir in sorted(grouped):
            files = grouped[rel_dir]
            if SKILL_FILE not in files:
                self.context.warn(f"Skipping {rel_dir}: no {SKILL_FILE}")
                continue
            main = files.pop(SKILL_FILE)
            parent = Path(rel_dir)
            units.append(ToolDir(self.output_dir, parent.parent.as_posix(), parent.name,
                                 SKILL_FILE, main, files))
        return units
