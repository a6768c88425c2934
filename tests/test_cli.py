"""
Unit tests for the command-line interface.

Tests cover:
- Argument parsing (subcommands, flags and options)
- Config file handling and CLI overrides
- generate / import / list-tools against a temporary project
- Exit codes for configuration, fatal and unexpected errors
- GUI fallback when nicegui is missing
"""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from cli.main import build_config, create_parser, main, setup_registry
from core.canonical_models import ConfigType, Scope
from core.errors import FilesystemError, UnsupportedOperationError
from core.report import FeatureResult, SyncReport

ROOT_RULE = "---\nroot: true\n---\n# Project rules\n"


@pytest.fixture
def project(tmp_path, monkeypatch):
    """Project with a root rule; cwd moved there so no stray agentsync.json is read."""
    monkeypatch.chdir(tmp_path)
    rules = tmp_path / '.agentsync' / 'rules'
    rules.mkdir(parents=True)
    (rules / 'overview.md').write_text(ROOT_RULE)
    return tmp_path


class TestCLIArgumentParsing:
    """Tests for argument parsing (all flags and options)."""

    @pytest.fixture
    def parser(self):
        """Create argument parser instance."""
        return create_parser()

    def test_generate_defaults(self, parser):
        args = parser.parse_args(['generate'])
        assert args.command == 'generate'
        assert args.targets is None
        assert args.features is None
        assert args.base_dir is None
        assert args.global_scope is False
        assert args.dry_run is False
        assert args.no_delete is False

    def test_generate_all_flags(self, parser):
        args = parser.parse_args([
            'generate', '--targets', 'claudecode,cursor', '--features', 'rules',
            '--base-dir', 'a', '--base-dir', 'b', '--global', '--dry-run',
            '--no-delete', '-v',
        ])
        assert args.targets == 'claudecode,cursor'
        assert args.base_dir == [Path('a'), Path('b')]
        assert args.global_scope is True
        assert args.dry_run is True
        assert args.no_delete is True
        assert args.verbose is True

    def test_import_requires_target(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args(['import'])
        assert parser.parse_args(['import', '--target', 'cursor']).target == 'cursor'

    def test_unknown_command(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args(['sync'])


class TestBuildConfig:
    """CLI flags applied over agentsync.json."""

    def parse(self, *argv):
        return create_parser().parse_args(['generate', *argv])

    def test_flags_override_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / 'agentsync.json').write_text(
            '{"targets": ["kiro"], "features": {"*": ["rules"], "cursor": ["mcp"]}}')

        config = build_config(self.parse('--targets', 'cursor, claudecode',
                                         '--features', 'rules,ignore', '--no-delete',
                                         '--global'))
        assert config.targets == ['cursor', 'claudecode']
        assert config.features == ['rules', 'ignore']
        assert config.feature_overrides == {}
        assert config.delete is False
        assert config.scope == Scope.GLOBAL

    def test_file_values_kept_without_flags(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / 'agentsync.json').write_text('{"targets": "kiro", "delete": false}')

        config = build_config(self.parse())
        assert config.targets == ['kiro']
        assert config.delete is False

    def test_explicit_config_path(self, tmp_path):
        path = tmp_path / 'custom.json'
        path.write_text('{"targets": ["cline"]}')
        assert build_config(self.parse('--config', str(path))).targets == ['cline']


class TestCommands:
    """End-to-end runs through main()."""

    def test_generate(self, project):
        ret = main(['generate', '--targets', 'agentsmd,claudecode', '--features', 'rules', '-s'])
        assert ret == 0
        assert (project / 'AGENTS.md').read_text() == '# Project rules\n'
        assert (project / '.claude' / 'CLAUDE.md').exists()

    def test_generate_base_dir(self, project, tmp_path_factory):
        other = tmp_path_factory.mktemp('other')
        (other / '.agentsync').mkdir()
        (other / '.agentsync' / '.aiignore').write_text('secrets/\n')

        ret = main(['generate', '--base-dir', str(other), '--targets', 'cursor', '-s'])
        assert ret == 0
        assert (other / '.cursorignore').read_text() == 'secrets/\n'
        assert not (project / '.cursorignore').exists()

    def test_dry_run(self, project, capsys):
        ret = main(['generate', '--targets', 'agentsmd', '--dry-run'])
        assert ret == 0
        assert not (project / 'AGENTS.md').exists()
        assert 'would write 1 file(s)' in capsys.readouterr().out

    def test_summary(self, project, capsys):
        main(['generate', '--targets', 'agentsmd'])
        assert 'Generate: wrote 1 file(s), deleted 0 file(s)' in capsys.readouterr().out

    def test_import(self, project):
        (project / '.cursorignore').write_text('dist/\n')
        ret = main(['import', '--target', 'cursor', '--features', 'ignore', '-s'])
        assert ret == 0
        assert (project / '.agentsync' / '.aiignore').read_text() == 'dist/\n'

    def test_list_tools(self, capsys):
        ret = main(['list-tools'])
        out = capsys.readouterr().out
        assert ret == 0
        assert len(out.strip().splitlines()) == len(setup_registry())
        assert 'claudecode' in out
        assert 'skills' in out

    def test_options_need_a_command(self):
        with pytest.raises(SystemExit):
            main(['--dry-run'])


class TestErrorHandling:
    """Exit codes and error output."""

    def test_unknown_target(self, project, capsys):
        ret = main(['generate', '--targets', 'vim'])
        assert ret == 1
        assert "Unknown target 'vim'" in capsys.readouterr().err

    def test_unknown_feature(self, project, capsys):
        assert main(['generate', '--features', 'prompts']) == 1
        assert "Unknown feature" in capsys.readouterr().err

    def test_missing_config_file(self, project, capsys):
        ret = main(['generate', '--config', str(project / 'missing.json')])
        assert ret == 1
        assert 'Config file not found' in capsys.readouterr().err

    def test_invalid_config_file(self, project, capsys):
        (project / 'agentsync.json').write_text('{"unknown": 1}')
        assert main(['generate']) == 1

    def test_unknown_import_target(self, project):
        assert main(['import', '--target', 'vim']) == 1

    def test_fatal_errors_exit_one(self, project, capsys):
        result = FeatureResult(ConfigType.RULES)
        result.errors.append(UnsupportedOperationError('cline', ConfigType.RULES, 'nope'))
        report = SyncReport()
        report.add(project, result)

        with patch('cli.main.SyncOrchestrator') as mock_orchestrator:
            mock_orchestrator.return_value.generate.return_value = report
            ret = main(['generate'])

        assert ret == 1
        err = capsys.readouterr().err
        assert '1 error(s):' in err
        assert '[cline/rules] nope' in err

    def test_filesystem_error(self, project, capsys):
        with patch('cli.main.SyncOrchestrator') as mock_orchestrator:
            mock_orchestrator.return_value.generate.side_effect = FilesystemError(
                'AGENTS.md', message='read-only file system')
            ret = main(['generate'])
        assert ret == 1
        assert 'read-only file system' in capsys.readouterr().err

    def test_unexpected_error_traceback_when_verbose(self, project, capsys):
        with patch('cli.main.SyncOrchestrator') as mock_orchestrator:
            mock_orchestrator.return_value.generate.side_effect = RuntimeError('boom')
            ret = main(['generate', '-v'])
        assert ret == 1
        err = capsys.readouterr().err
        assert 'Error: boom' in err
        assert 'Traceback' in err

    def test_keyboard_interrupt(self, project, capsys):
        with patch('cli.main.SyncOrchestrator') as mock_orchestrator:
            mock_orchestrator.return_value.generate.side_effect = KeyboardInterrupt
            assert main(['generate']) == 1
        assert 'cancelled' in capsys.readouterr().err

    def test_gui_without_nicegui(self, capsys):
        with patch.dict(sys.modules, {'gui.main': None}):
            ret = main(['--gui'])
        assert ret == 1
        assert 'nicegui' in capsys.readouterr().err
