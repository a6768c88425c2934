"""
Unit tests for canonical data models, frontmatter and the canonical store.

Tests cover:
- Frontmatter parsing and rendering
- Parsing each canonical kind (rules, commands, subagents, skills, mcp, hooks)
- Serialization as the inverse of parsing
- Tool extension blocks
- ToolFile path traversal protection
- CanonicalStore loading with per-file error collection
"""

import pytest
from pathlib import Path

from core.canonical_io import (
    CanonicalStore, canonical_files, parse_command, parse_hooks, parse_mcp, parse_rule,
    parse_skill, parse_subagent, serialize,
)
from core.canonical_models import (
    CanonicalHooks, CanonicalMcp, CanonicalRule, ConfigType, ToolDir, ToolFile,
)
from core.errors import ParseError, ValidationError
from core.frontmatter import parse_frontmatter, stringify_frontmatter


class TestFrontmatter:
    """Tests for YAML frontmatter helpers."""

    def test_parse_with_frontmatter(self):
        frontmatter, body = parse_frontmatter("---\nroot: true\n---\n# Title\n")
        assert frontmatter == {'root': True}
        assert body == "# Title"

    def test_parse_without_frontmatter(self):
        frontmatter, body = parse_frontmatter("Just a body\n\n")
        assert frontmatter == {}
        assert body == "Just a body"

    def test_parse_empty_frontmatter_block(self):
        frontmatter, body = parse_frontmatter("---\n---\nBody\n")
        assert frontmatter == {}
        assert body == "Body"

    def test_malformed_yaml_raises_parse_error(self):
        with pytest.raises(ParseError, match="Invalid YAML"):
            parse_frontmatter("---\nkey: [unclosed\n---\nbody\n", "rules/bad.md")

    def test_non_mapping_frontmatter_raises_parse_error(self):
        with pytest.raises(ParseError, match="mapping"):
            parse_frontmatter("---\n- a\n- b\n---\nbody\n")

    def test_parse_error_carries_path(self):
        with pytest.raises(ParseError) as exc_info:
            parse_frontmatter("---\nkey: [unclosed\n---\n", "rules/bad.md")
        assert exc_info.value.path == "rules/bad.md"
        assert str(exc_info.value).startswith("rules/bad.md: ")

    def test_stringify_drops_none_values(self):
        content = stringify_frontmatter({'description': None, 'paths': 'src'}, "Body")
        assert content == "---\npaths: src\n---\nBody\n"

    def test_stringify_without_frontmatter(self):
        assert stringify_frontmatter({'description': None}, "  Body  \n") == "Body\n"

    def test_stringify_keeps_key_order(self):
        content = stringify_frontmatter({'name': 'a', 'description': 'b'}, "Body")
        assert content.index('name:') < content.index('description:')


class TestCanonicalRule:
    """Tests for rule parsing and serialization."""

    @pytest.fixture
    def rule_content(self):
        return """---
root: true
targets: ['*']
description: d
globs: ['**/*']
cursor:
  alwaysApply: true
---
# Test Rule
"""

    def test_parse_rule(self, rule_content):
        rule = parse_rule(rule_content, 'overview.md')
        assert rule.root is True
        assert rule.targets == ['*']
        assert rule.description == 'd'
        assert rule.globs == ['**/*']
        assert rule.body == '# Test Rule'
        assert rule.relative_dir_path == '.agentsync/rules'
        assert rule.relative_file_path == 'overview.md'

    def test_tool_block_is_metadata(self, rule_content):
        rule = parse_rule(rule_content, 'overview.md')
        assert rule.get_metadata('cursor') == {'alwaysApply': True}
        assert not rule.has_metadata('claudecode')

    def test_defaults(self):
        rule = parse_rule("Body only\n", 'plain.md')
        assert rule.root is False
        assert rule.targets == ['*']
        assert rule.description == ''
        assert rule.globs == []

    def test_comma_separated_globs(self):
        rule = parse_rule("---\nglobs: 'src/**, tests/**'\n---\nBody\n", 'a.md')
        assert rule.globs == ['src/**', 'tests/**']

    def test_single_target_string(self):
        rule = parse_rule("---\ntargets: cursor\n---\nBody\n", 'a.md')
        assert rule.targets == ['cursor']

    def test_invalid_root_type_raises_validation_error(self):
        with pytest.raises(ValidationError, match="root"):
            parse_rule("---\nroot: [1, 2]\n---\nBody\n", 'a.md')

    def test_serialize_round_trip(self, rule_content):
        rule = parse_rule(rule_content, 'overview.md')
        reparsed = parse_rule(serialize(rule), 'overview.md')

        assert reparsed.root == rule.root
        assert reparsed.targets == rule.targets
        assert reparsed.description == rule.description
        assert reparsed.globs == rule.globs
        assert reparsed.body == rule.body
        assert reparsed.metadata == rule.metadata
        assert serialize(reparsed) == serialize(rule)

    def test_stem_keeps_subdirectory(self):
        rule = CanonicalRule(body='x', relative_file_path='api/conventions.md')
        assert rule.stem == 'api/conventions'


class TestOtherCanonicalKinds:
    """Tests for commands, subagents, skills, MCP and hooks."""

    def test_parse_command(self):
        command = parse_command("---\ndescription: Review\nclaudecode:\n  allowed-tools: Bash\n---\nDo it\n",
                                'review.md')
        assert command.description == 'Review'
        assert command.body == 'Do it'
        assert command.get_metadata('claudecode') == {'allowed-tools': 'Bash'}

    def test_command_requires_description(self):
        with pytest.raises(ValidationError, match="description"):
            parse_command("---\ntargets: ['*']\n---\nBody\n", 'x.md')

    def test_parse_subagent(self):
        subagent = parse_subagent(
            "---\nname: reviewer\ndescription: Reviews code\n---\nYou review code.\n", 'reviewer.md')
        assert subagent.name == 'reviewer'
        assert subagent.description == 'Reviews code'
        assert subagent.body == 'You review code.'

    def test_subagent_requires_name(self):
        with pytest.raises(ValidationError, match="name"):
            parse_subagent("---\ndescription: x\n---\nBody\n", 'x.md')

    def test_parse_skill_with_other_files(self):
        skill = parse_skill('pdf', "---\nname: pdf\ndescription: PDF tools\n---\nUse it\n",
                            {'scripts/run.sh': 'echo hi\n'})
        assert skill.dir_name == 'pdf'
        assert skill.other_files == {'scripts/run.sh': 'echo hi\n'}

        files = canonical_files(skill)
        assert files[0][0] == '.agentsync/skills/pdf'
        assert files[0][1] == 'SKILL.md'
        assert files[1] == ('.agentsync/skills/pdf', 'scripts/run.sh', 'echo hi\n')

    def test_parse_mcp(self):
        mcp = parse_mcp('{"mcpServers": {"fs": {"command": "npx", "args": ["-y", "fs"]}}}')
        assert mcp.servers == {'fs': {'command': 'npx', 'args': ['-y', 'fs']}}

    def test_mcp_server_needs_transport(self):
        with pytest.raises(ValidationError, match="command"):
            parse_mcp('{"mcpServers": {"broken": {"args": ["x"]}}}')

    def test_mcp_invalid_json(self):
        with pytest.raises(ParseError, match="Invalid JSON"):
            parse_mcp('{not json')

    def test_servers_for_filters_targets(self):
        mcp = CanonicalMcp(servers={
            'all': {'command': 'a'},
            'cursor-only': {'command': 'b', 'targets': ['cursor'], 'description': 'x'},
        })
        assert set(mcp.servers_for('cursor')) == {'all', 'cursor-only'}
        assert mcp.servers_for('cursor')['cursor-only'] == {'command': 'b'}
        assert set(mcp.servers_for('claudecode')) == {'all'}

    def test_servers_for_empty_targets_selects_nothing(self):
        mcp = CanonicalMcp(servers={'off': {'command': 'a', 'targets': []}})
        assert mcp.servers_for('cursor') == {}

    def test_parse_hooks_with_tool_block(self):
        hooks = parse_hooks(
            '{"version": 1, "hooks": {"preToolUse": [{"command": "./check.sh", "matcher": "Bash"}]},'
            ' "cursor": {"hooks": {"afterFileEdit": [{"command": "./fmt.sh"}]}}}')
        assert hooks.hooks == {'preToolUse': [{'command': './check.sh', 'matcher': 'Bash'}]}
        assert hooks.get_metadata('cursor') == {
            'hooks': {'afterFileEdit': [{'command': './fmt.sh'}]}}

    def test_hook_command_rejects_newline(self):
        with pytest.raises(ValidationError, match="newline"):
            parse_hooks('{"hooks": {"stop": [{"command": "a\\nb"}]}}')

    def test_hook_type_must_be_known(self):
        with pytest.raises(ValidationError):
            parse_hooks('{"hooks": {"stop": [{"type": "script", "command": "a"}]}}')

    def test_hooks_for_overlays_tool_block(self):
        hooks = CanonicalHooks(hooks={'stop': [{'command': 'a'}], 'setup': [{'command': 'b'}]})
        hooks.add_metadata('cursor', {'hooks': {'afterFileEdit': [{'command': 'c'}]}})

        merged = hooks.hooks_for('cursor', ['stop', 'afterFileEdit'])
        assert merged == {'stop': [{'command': 'a'}], 'afterFileEdit': [{'command': 'c'}]}


class TestToolPaths:
    """Tests for ToolFile and ToolDir path handling."""

    def test_full_path_inside_base(self, tmp_path):
        tool_file = ToolFile(tmp_path, '.cursor/rules', 'a.mdc', 'x')
        assert tool_file.full_path == (tmp_path / '.cursor/rules/a.mdc').resolve()

    def test_path_traversal_rejected(self, tmp_path):
        tool_file = ToolFile(tmp_path, '.cursor/rules', '../../../etc/passwd', 'x')
        with pytest.raises(ValidationError, match="Path traversal"):
            tool_file.full_path

    def test_tool_dir_rejects_nested_name(self, tmp_path):
        with pytest.raises(ValidationError):
            ToolDir(tmp_path, '.claude/skills', '../evil', 'SKILL.md', 'x')

    def test_tool_dir_to_files(self, tmp_path):
        tool_dir = ToolDir(tmp_path, '.claude/skills', 'pdf', 'SKILL.md', 'main',
                           {'b.txt': 'b', 'a.txt': 'a'})
        files = tool_dir.to_files()
        assert [f.relative_file_path for f in files] == ['SKILL.md', 'a.txt', 'b.txt']
        assert all(f.relative_dir_path == str(Path('.claude/skills/pdf')) for f in files)


class TestCanonicalStore:
    """Tests for loading the canonical source tree."""

    @pytest.fixture
    def store(self, tmp_path):
        rules = tmp_path / '.agentsync' / 'rules'
        rules.mkdir(parents=True)
        (rules / 'overview.md').write_text("---\nroot: true\n---\nRoot\n")
        (rules / 'good.md').write_text("---\ndescription: fine\n---\nGood\n")
        (rules / 'bad.md').write_text("---\nkey: [unclosed\n---\nBad\n")
        return CanonicalStore(tmp_path)

    def test_missing_source_is_empty(self, tmp_path):
        result = CanonicalStore(tmp_path).load(ConfigType.RULES)
        assert result.artifacts == []
        assert result.errors == []

    def test_bad_file_does_not_hide_siblings(self, store):
        result = store.load(ConfigType.RULES)
        assert sorted(a.relative_file_path for a in result.artifacts) == ['good.md', 'overview.md']
        assert len(result.errors) == 1
        assert isinstance(result.errors[0], ParseError)
        assert result.errors[0].path.endswith('bad.md')

    def test_second_root_rule_is_rejected(self, store, tmp_path):
        (tmp_path / '.agentsync/rules/zz-root.md').write_text("---\nroot: true\n---\nAnother\n")
        result = store.load(ConfigType.RULES)
        roots = [a for a in result.artifacts if a.root]
        assert [r.relative_file_path for r in roots] == ['overview.md']
        assert any('Multiple root rules' in str(e) for e in result.errors)

    def test_nested_rules_keep_subdirectory(self, store, tmp_path):
        nested = tmp_path / '.agentsync/rules/api'
        nested.mkdir()
        (nested / 'style.md').write_text("Style\n")
        result = store.load(ConfigType.RULES)
        assert 'api/style.md' in [a.relative_file_path for a in result.artifacts]

    def test_ignore_yaml_preferred_over_text(self, tmp_path):
        root = tmp_path / '.agentsync'
        root.mkdir()
        (root / '.aiignore').write_text("from-text\n")
        (root / 'ignore.yaml').write_text("version: 1\nrules:\n  - path: from-yaml\n    actions: [read]\n")
        result = CanonicalStore(tmp_path).load(ConfigType.IGNORE)
        assert result.artifacts[0].patterns == ['from-yaml']

    def test_skill_without_main_file_warns(self, tmp_path):
        (tmp_path / '.agentsync/skills/empty').mkdir(parents=True)
        result = CanonicalStore(tmp_path).load(ConfigType.SKILLS)
        assert result.artifacts == []
        assert any('no SKILL.md' in w for w in result.warnings)
