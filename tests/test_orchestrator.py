"""
Tests for SyncOrchestrator.

Tests cover:
- Configuration checks before any file is touched
- Multiple base directories
- Import of a tool's files into .agentsync/
- Import idempotence and never deleting canonical files
"""

import json

import pytest

from core.canonical_io import CanonicalStore
from core.canonical_models import ConfigType
from core.config import SyncConfig
from core.context import RunContext
from core.errors import ConfigError
from core.orchestrator import SyncOrchestrator
from adapters import create_default_registry


def write(base, rel, content):
    path = base / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def orchestrator(base, **config_kwargs):
    config = SyncConfig(base_dirs=[base], **config_kwargs)
    return SyncOrchestrator(config, create_default_registry(), RunContext(silent=True))


class TestGenerate:

    def test_unknown_target_fails_before_work(self, tmp_path):
        write(tmp_path, '.agentsync/rules/overview.md', "---\nroot: true\n---\n# Root\n")
        with pytest.raises(ConfigError, match="Unknown target 'vim'"):
            orchestrator(tmp_path, targets=['claudecode', 'vim']).generate()
        assert not (tmp_path / '.claude').exists()

    def test_unknown_feature_fails(self, tmp_path):
        with pytest.raises(ConfigError):
            orchestrator(tmp_path, features=['prompts']).generate()

    def test_unknown_override_tool_fails(self, tmp_path):
        with pytest.raises(ConfigError, match="per-target features"):
            orchestrator(tmp_path, feature_overrides={'vim': ['rules']}).generate()

    def test_enabled_features_include_overrides(self, tmp_path):
        orch = orchestrator(tmp_path, features=['rules'], feature_overrides={'cursor': ['mcp']})
        assert orch.enabled_features() == [ConfigType.RULES, ConfigType.MCP]

    def test_multiple_base_dirs(self, tmp_path):
        first = tmp_path / 'one'
        second = tmp_path / 'two'
        write(first, '.agentsync/rules/overview.md', "---\nroot: true\n---\n# One\n")
        write(second, '.agentsync/rules/overview.md', "---\nroot: true\n---\n# Two\n")

        config = SyncConfig(base_dirs=[first, second], targets=['agentsmd'])
        report = SyncOrchestrator(config, create_default_registry(),
                                  RunContext(silent=True)).generate()

        assert (first / 'AGENTS.md').read_text() == '# One\n'
        assert (second / 'AGENTS.md').read_text() == '# Two\n'
        assert report.get(ConfigType.RULES, first).created == 1
        assert report.get(ConfigType.RULES).created == 2

    def test_empty_canonical_source(self, tmp_path):
        report = orchestrator(tmp_path).generate()
        assert report.total_written == 0
        assert report.errors == []


class TestImport:
    """Import from Claude Code into the canonical source."""

    @pytest.fixture
    def project(self, tmp_path):
        write(tmp_path, '.claude/CLAUDE.md', "# Project\n")
        write(tmp_path, '.claude/rules/api.md', "---\npaths: src/**\n---\nAPI rules\n")
        write(tmp_path, '.claude/commands/review.md', "---\ndescription: Review\n---\nReview it\n")
        write(tmp_path, '.claude/agents/reviewer.md',
              "---\nname: reviewer\ndescription: Reviews\nmodel: sonnet\n---\nReview.\n")
        write(tmp_path, '.claude/skills/pdf/SKILL.md',
              "---\nname: pdf\ndescription: PDF\n---\nUse it\n")
        write(tmp_path, '.claude/skills/pdf/notes.txt', "notes\n")
        write(tmp_path, '.mcp.json', '{"mcpServers": {"fs": {"command": "npx"}}}')
        write(tmp_path, '.claude/settings.local.json',
              '{"permissions": {"deny": ["Read(.env)", "Bash(rm:*)"]}}')
        write(tmp_path, '.claude/settings.json', json.dumps({
            'hooks': {'Stop': [{'hooks': [
                {'type': 'command', 'command': '$CLAUDE_PROJECT_DIR/done.sh'}]}]}
        }))
        return tmp_path

    def test_import_writes_canonical_files(self, project):
        report = orchestrator(project).import_tool('claudecode')
        assert report.errors == []

        store = CanonicalStore(project)
        rules = {r.relative_file_path: r for r in store.load(ConfigType.RULES).artifacts}
        assert set(rules) == {'overview.md', 'api.md'}
        assert rules['overview.md'].root is True
        assert rules['overview.md'].body.strip() == '# Project'
        assert rules['api.md'].globs == ['src/**']

        commands = store.load(ConfigType.COMMANDS).artifacts
        assert [c.description for c in commands] == ['Review']

        subagents = store.load(ConfigType.SUBAGENTS).artifacts
        assert subagents[0].get_metadata('claudecode') == {'model': 'sonnet'}

        skills = store.load(ConfigType.SKILLS).artifacts
        assert skills[0].other_files == {'notes.txt': 'notes\n'}

        mcp = store.load(ConfigType.MCP).artifacts[0]
        assert mcp.servers == {'fs': {'command': 'npx'}}

        hooks = store.load(ConfigType.HOOKS).artifacts[0]
        assert hooks.hooks == {'stop': [{'type': 'command', 'command': 'done.sh'}]}

    def test_ignore_import_keeps_file_rules_only(self, project):
        orchestrator(project).import_tool('claudecode')
        assert (project / '.agentsync/.aiignore').read_text() == '.env\n'

    def test_second_import_writes_nothing(self, project):
        orchestrator(project).import_tool('claudecode')
        report = orchestrator(project).import_tool('claudecode')
        assert report.total_written == 0

    def test_import_never_deletes_canonical_files(self, project):
        keep = write(project, '.agentsync/rules/keep.md', "Keep me\n")
        report = orchestrator(project).import_tool('claudecode')
        assert keep.exists()
        assert report.total_deleted == 0

    def test_import_selected_features(self, project):
        report = orchestrator(project).import_tool('claudecode', features=['mcp'])
        assert (project / '.agentsync/mcp.json').exists()
        assert not (project / '.agentsync/rules').exists()
        assert report.get(ConfigType.MCP).created == 1

    def test_ignore_import_updates_existing_yaml(self, tmp_path):
        write(tmp_path, '.agentsync/ignore.yaml',
              "version: 1\nrules:\n  - path: old/\n    actions: [read]\n")
        write(tmp_path, '.cursorignore', 'new/\n')

        report = orchestrator(tmp_path).import_tool('cursor', features=['ignore'])
        assert report.errors == []
        assert not (tmp_path / '.agentsync/.aiignore').exists()

        loaded = CanonicalStore(tmp_path).load(ConfigType.IGNORE)
        assert loaded.artifacts[0].patterns == ['new/']

    def test_ignore_import_without_yaml_writes_aiignore(self, tmp_path):
        write(tmp_path, '.cursorignore', 'new/\n')
        orchestrator(tmp_path).import_tool('cursor', features=['ignore'])
        assert (tmp_path / '.agentsync/.aiignore').read_text() == 'new/\n'
        assert not (tmp_path / '.agentsync/ignore.yaml').exists()

    def test_gemini_command_import(self, tmp_path):
        write(tmp_path, '.gemini/commands/review.toml',
              'description = "Review"\nprompt = """\nReview the diff.\n"""\n')

        report = orchestrator(tmp_path).import_tool('geminicli', features=['commands'])
        assert report.errors == []
        assert (tmp_path / '.agentsync/commands/review.md').exists()

        commands = CanonicalStore(tmp_path).load(ConfigType.COMMANDS).artifacts
        assert [(c.description, c.body.strip()) for c in commands] == [('Review', 'Review the diff.')]

    def test_empty_document_is_not_imported(self, tmp_path):
        write(tmp_path, '.claude/settings.json', '{"model": "opus"}')
        orchestrator(tmp_path).import_tool('claudecode', features=['hooks'])
        assert not (tmp_path / '.agentsync/hooks.json').exists()

    def test_unsupported_kind_is_skipped(self, project):
        report = orchestrator(project).import_tool('agentsmd', features=['mcp'])
        assert report.total_written == 0
        assert report.errors == []

    def test_unknown_tool(self, project):
        with pytest.raises(ConfigError, match="Unknown target 'vim'"):
            orchestrator(project).import_tool('vim')

    def test_dry_run_import(self, project):
        config = SyncConfig(base_dirs=[project], dry_run=True)
        report = SyncOrchestrator(config, create_default_registry(),
                                  RunContext(silent=True, dry_run=True)).import_tool('claudecode')
        assert report.total_written > 0
        assert not (project / '.agentsync').exists()
