"""
Unit tests for the tool registry and target/feature resolution.

Tests cover:
- Adapter registration and unregistration
- Registration order as wildcard expansion order
- Config type and scope support queries
- resolve_targets / resolve_features / features_for_target
"""

import pytest

from core.canonical_models import CanonicalRule, ConfigType, Scope
from core.errors import ConfigError
from core.registry import ToolRegistry
from core.targets import features_for_target, filter_targeted, resolve_features, resolve_targets
from adapters import (
    AgentsMdAdapter, ClaudeAdapter, CodexCliAdapter, CursorAdapter, create_default_registry,
)


class TestToolRegistry:
    """Tests for ToolRegistry."""

    @pytest.fixture
    def registry(self):
        """Create ToolRegistry with some adapters."""
        registry = ToolRegistry()
        registry.register(ClaudeAdapter())
        registry.register(CursorAdapter())
        return registry

    def test_register_adapter(self):
        registry = ToolRegistry()
        registry.register(ClaudeAdapter())
        assert 'claudecode' in registry.list_tools()
        assert registry.get_adapter('claudecode') is not None

    def test_register_duplicate_raises_error(self, registry):
        with pytest.raises(ValueError, match="already registered"):
            registry.register(ClaudeAdapter())

    def test_get_unknown_adapter(self, registry):
        assert registry.get_adapter('nonexistent') is None

    def test_unregister(self, registry):
        registry.unregister('cursor')
        assert 'cursor' not in registry
        assert len(registry) == 1

    def test_registration_order_is_kept(self, registry):
        assert registry.list_tools() == ['claudecode', 'cursor']

    def test_supports_config_type(self, registry):
        assert registry.supports_config_type('claudecode', ConfigType.SKILLS)
        assert not registry.supports_config_type('cursor', ConfigType.SKILLS)
        assert not registry.supports_config_type('nonexistent', ConfigType.RULES)

    def test_tools_supporting_scope(self):
        registry = ToolRegistry()
        registry.register(ClaudeAdapter())
        registry.register(CodexCliAdapter())
        assert registry.get_tools_supporting(ConfigType.MCP) == ['claudecode', 'codexcli']
        assert registry.get_tools_supporting(ConfigType.MCP, Scope.PROJECT) == ['claudecode']

    def test_default_registry_order(self):
        assert create_default_registry().list_tools() == [
            'agentsmd', 'claudecode', 'cline', 'codexcli',
            'copilot', 'cursor', 'geminicli', 'kiro',
        ]


class TestResolveTargets:
    """Tests for target resolution."""

    @pytest.fixture
    def registry(self):
        return create_default_registry()

    def test_wildcard_expands_in_registry_order(self, registry):
        assert resolve_targets(['*'], registry) == registry.list_tools()
        assert resolve_targets('*', registry) == registry.list_tools()

    def test_wildcard_filtered_by_config_type(self, registry):
        assert resolve_targets(['*'], registry, ConfigType.SKILLS) == ['claudecode']
        assert resolve_targets(['*'], registry, ConfigType.HOOKS) == ['claudecode', 'cursor']

    def test_explicit_targets_keep_order_and_dedupe(self, registry):
        assert resolve_targets(['cursor', 'claudecode', 'cursor'], registry) == [
            'cursor', 'claudecode']

    def test_explicit_target_without_kind_is_dropped(self, registry):
        assert resolve_targets(['agentsmd', 'claudecode'], registry, ConfigType.MCP) == [
            'claudecode']

    def test_unknown_target_raises(self, registry):
        with pytest.raises(ConfigError, match="Unknown target 'vim'"):
            resolve_targets(['claudecode', 'vim'], registry)


class TestResolveFeatures:
    """Tests for feature resolution."""

    def test_wildcard(self):
        assert resolve_features(['*']) == list(ConfigType)
        assert resolve_features(None) == list(ConfigType)

    def test_named_features(self):
        assert resolve_features(['mcp', 'rules', 'mcp']) == [ConfigType.MCP, ConfigType.RULES]

    def test_unknown_feature_raises(self):
        with pytest.raises(ConfigError, match="Unknown feature 'prompts'"):
            resolve_features(['rules', 'prompts'])

    def test_per_target_override_wins(self):
        overrides = {'cursor': ['rules']}
        assert features_for_target('cursor', ['*'], overrides) == [ConfigType.RULES]
        assert features_for_target('claudecode', ['mcp'], overrides) == [ConfigType.MCP]

    def test_filter_targeted(self):
        handler = AgentsMdAdapter().get_handler(ConfigType.RULES)
        everyone = CanonicalRule(body='a')
        cursor_only = CanonicalRule(body='b', targets=['cursor'])
        mine = CanonicalRule(body='c', targets=['agentsmd', 'cursor'])
        assert filter_targeted([everyone, cursor_only, mine], handler) == [everyone, mine]
