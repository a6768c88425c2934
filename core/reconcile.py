"""
Write/diff engine.

``reconcile`` is a pure three-way diff keyed on destination path:
- generated and absent on disk (or different after newline normalization)
  -> to_write
- generated and identical -> unchanged
- on disk but not generated -> to_delete (orphan), unless the existing file
  is a shared document the engine does not own

Renames are not detected; they surface as one delete plus one write.

``apply_result`` performs the mutation. It is all-or-nothing per call: if
any write or delete fails, the changes already made are rolled back before
a FilesystemError is raised. Dry-run performs the identical computation and
skips the mutation.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from .canonical_models import ToolFile
from .context import RunContext
from .errors import FilesystemError


def normalize_content(content: str) -> str:
    """Canonical trailing-newline form: exactly one ``\\n`` at the end."""
    return content.rstrip() + '\n'


@dataclass
class WriteOp:
    tool_file: ToolFile
    path: Path
    created: bool
    previous: Optional[str] = None


@dataclass
class ReconcileResult:
    to_write: List[WriteOp] = field(default_factory=list)
    to_delete: List[ToolFile] = field(default_factory=list)
    unchanged: List[ToolFile] = field(default_factory=list)

    @property
    def created(self) -> int:
        return sum(1 for op in self.to_write if op.created)

    @property
    def overwritten(self) -> int:
        return sum(1 for op in self.to_write if not op.created)

    def is_empty(self) -> bool:
        return not self.to_write and not self.to_delete


def reconcile(generated: Iterable[ToolFile], existing: Iterable[ToolFile],
              delete: bool = True) -> ReconcileResult:
    """
    Diff generated tool files against the files already on disk.

    Args:
        generated: Files produced by conversion; a later entry for the same
            path replaces an earlier one
        existing: Files found on disk
        delete: When False, orphans are left alone and reported as unchanged

    Returns:
        ReconcileResult with to_write, to_delete and unchanged
    """
    generated_map: Dict[Path, ToolFile] = {}
    for tool_file in generated:
        generated_map[tool_file.full_path] = tool_file

    existing_map: Dict[Path, ToolFile] = {}
    for tool_file in existing:
        existing_map[tool_file.full_path] = tool_file

    result = ReconcileResult()
    for path, tool_file in generated_map.items():
        current = existing_map.get(path)
        if current is None:
            result.to_write.append(WriteOp(tool_file, path, created=True))
        elif normalize_content(current.content) != normalize_content(tool_file.content):
            result.to_write.append(WriteOp(tool_file, path, created=False,
                                           previous=current.content))
        else:
            result.unchanged.append(tool_file)

    for path, tool_file in existing_map.items():
        if path in generated_map or not tool_file.deletable:
            continue
        if delete:
            result.to_delete.append(tool_file)
        else:
            result.unchanged.append(tool_file)

    return result


def _write(path: Path, content: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)


def _rollback(journal: List[Tuple[Path, Optional[str]]]):
    """Restore journaled paths in reverse order; best effort."""
    for path, previous in reversed(journal):
        try:
            if previous is None:
                if path.exists():
                    path.unlink()
            else:
                _write(path, previous)
        except OSError:
            continue


def prune_empty_dirs(start: Path, stop: Path):
    """Remove empty directories from ``start`` upwards, stopping below ``stop``."""
    current = start
    stop = stop.resolve()
    while current != stop and stop in current.parents:
        try:
            if any(current.iterdir()):
                return
            current.rmdir()
        except OSError:
            return
        current = current.parent


def apply_result(result: ReconcileResult, context: RunContext,
                 prune_within: Optional[List[Path]] = None) -> Tuple[List[Path], List[Path]]:
    """
    Apply a reconcile result to disk.

    Args:
        result: Output of ``reconcile``
        context: Run context (dry_run suppresses every mutation)
        prune_within: Managed directories; empty directories left below them
            by deletions are removed

    Returns:
        (written_paths, deleted_paths), identical in dry-run and real runs

    Raises:
        FilesystemError: After rolling back every change made by this call
    """
    written = [op.path for op in result.to_write]
    deleted = [tool_file.full_path for tool_file in result.to_delete]

    for path in written:
        context.action('write', path)
    for path in deleted:
        context.action('delete', path)

    if context.dry_run:
        return written, deleted

    journal: List[Tuple[Path, Optional[str]]] = []
    current_path = None
    try:
        for op in result.to_write:
            current_path = op.path
            previous = op.previous
            if previous is None and op.path.exists():
                with open(op.path, 'r', encoding='utf-8', errors='replace') as f:
                    previous = f.read()
            journal.append((op.path, previous))
            _write(op.path, normalize_content(op.tool_file.content))

        for tool_file, path in zip(result.to_delete, deleted):
            current_path = path
            journal.append((path, tool_file.content))
            if path.exists():
                os.remove(path)
    except OSError as e:
        _rollback(journal)
        raise FilesystemError(current_path, e)

    for path in deleted:
        for root in prune_within or []:
            if Path(root).resolve() in path.parents:
                prune_empty_dirs(path.parent, Path(root))
                break

    return written, deleted
