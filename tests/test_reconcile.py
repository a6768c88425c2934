"""
Unit tests for the write/diff engine.

Tests cover:
- Three-way diff (create, overwrite, unchanged, orphan)
- Trailing newline normalization
- Shared (non-deletable) documents
- Dry-run parity with real runs
- Rollback on I/O failure
- Pruning of emptied directories
"""

import pytest
from unittest.mock import patch

from core import reconcile as reconcile_module
from core.canonical_models import ToolFile
from core.context import RunContext
from core.errors import FilesystemError
from core.reconcile import apply_result, normalize_content, reconcile


def tool_file(base, rel_dir, name, content, **kwargs):
    return ToolFile(base, rel_dir, name, content, **kwargs)


class TestNormalizeContent:

    def test_single_trailing_newline(self):
        assert normalize_content("a\n\n\n") == "a\n"
        assert normalize_content("a") == "a\n"

    def test_empty_content(self):
        assert normalize_content("") == "\n"


class TestReconcile:
    """Tests for the pure diff."""

    def test_new_file_is_created(self, tmp_path):
        result = reconcile([tool_file(tmp_path, 'd', 'a.md', 'x')], [])
        assert len(result.to_write) == 1
        assert result.to_write[0].created is True
        assert result.created == 1

    def test_changed_file_is_overwritten(self, tmp_path):
        result = reconcile([tool_file(tmp_path, 'd', 'a.md', 'new')],
                           [tool_file(tmp_path, 'd', 'a.md', 'old')])
        assert result.overwritten == 1
        assert result.to_write[0].previous == 'old'

    def test_identical_after_newline_normalization(self, tmp_path):
        result = reconcile([tool_file(tmp_path, 'd', 'a.md', 'same')],
                           [tool_file(tmp_path, 'd', 'a.md', 'same\n\n')])
        assert result.is_empty()
        assert len(result.unchanged) == 1

    def test_orphan_is_deleted(self, tmp_path):
        result = reconcile([], [tool_file(tmp_path, 'd', 'gone.md', 'x')])
        assert [f.relative_file_path for f in result.to_delete] == ['gone.md']

    def test_orphan_kept_when_delete_disabled(self, tmp_path):
        result = reconcile([], [tool_file(tmp_path, 'd', 'gone.md', 'x')], delete=False)
        assert result.to_delete == []
        assert len(result.unchanged) == 1

    def test_shared_document_never_deleted(self, tmp_path):
        shared = tool_file(tmp_path, '.claude', 'settings.json', '{}', deletable=False)
        result = reconcile([], [shared])
        assert result.to_delete == []

    def test_later_generated_entry_wins(self, tmp_path):
        result = reconcile([tool_file(tmp_path, '.', 'AGENTS.md', 'first'),
                            tool_file(tmp_path, '.', 'AGENTS.md', 'second')], [])
        assert len(result.to_write) == 1
        assert result.to_write[0].tool_file.content == 'second'


class TestApplyResult:
    """Tests for applying a diff to disk."""

    @pytest.fixture
    def context(self):
        return RunContext(silent=True)

    def test_writes_and_deletes(self, tmp_path, context):
        orphan = tmp_path / 'd' / 'gone.md'
        orphan.parent.mkdir()
        orphan.write_text('x')

        plan = reconcile([tool_file(tmp_path, 'd', 'a.md', 'hello')],
                         [tool_file(tmp_path, 'd', 'gone.md', 'x')])
        written, deleted = apply_result(plan, context)

        assert (tmp_path / 'd' / 'a.md').read_text() == 'hello\n'
        assert not orphan.exists()
        assert written == [(tmp_path / 'd' / 'a.md').resolve()]
        assert deleted == [orphan.resolve()]

    def test_dry_run_reports_same_but_touches_nothing(self, tmp_path):
        orphan = tmp_path / 'gone.md'
        orphan.write_text('x')

        def make_plan():
            return reconcile([tool_file(tmp_path, '.', 'a.md', 'hello')],
                             [tool_file(tmp_path, '.', 'gone.md', 'x')])

        dry = apply_result(make_plan(), RunContext(silent=True, dry_run=True))
        assert not (tmp_path / 'a.md').exists()
        assert orphan.exists()

        real = apply_result(make_plan(), RunContext(silent=True))
        assert dry == real

    def test_dry_run_logs_would_write(self, tmp_path):
        messages = []
        context = RunContext(verbose=True, dry_run=True, logger=messages.append)
        apply_result(reconcile([tool_file(tmp_path, '.', 'a.md', 'x')], []), context)
        assert any('Would write' in m for m in messages)

    def test_rollback_on_write_failure(self, tmp_path, context):
        existing = tmp_path / 'a.md'
        existing.write_text('old\n')
        plan = reconcile(
            [tool_file(tmp_path, '.', 'a.md', 'new'), tool_file(tmp_path, '.', 'b.md', 'b')],
            [tool_file(tmp_path, '.', 'a.md', 'old\n')],
        )
        real_write = reconcile_module._write

        def flaky_write(path, content):
            if path.name == 'b.md':
                raise OSError("disk full")
            real_write(path, content)

        with patch('core.reconcile._write', side_effect=flaky_write):
            with pytest.raises(FilesystemError) as exc_info:
                apply_result(plan, context)

        assert 'b.md' in exc_info.value.path
        assert existing.read_text() == 'old\n'
        assert not (tmp_path / 'b.md').exists()

    def test_rollback_on_delete_failure(self, tmp_path, context):
        orphan = tmp_path / 'gone.md'
        orphan.write_text('x')
        plan = reconcile([tool_file(tmp_path, '.', 'new.md', 'n')],
                         [tool_file(tmp_path, '.', 'gone.md', 'x')])

        with patch('core.reconcile.os.remove', side_effect=PermissionError("denied")):
            with pytest.raises(FilesystemError):
                apply_result(plan, context)

        assert not (tmp_path / 'new.md').exists()
        assert orphan.read_text() == 'x'

    def test_prunes_emptied_subdirectories(self, tmp_path, context):
        managed = tmp_path / '.cursor' / 'rules'
        nested = managed / 'api'
        nested.mkdir(parents=True)
        (nested / 'style.mdc').write_text('x')

        plan = reconcile([], [tool_file(tmp_path, '.cursor/rules', 'api/style.mdc', 'x')])
        apply_result(plan, context, prune_within=[managed])

        assert not nested.exists()
        assert managed.is_dir()
