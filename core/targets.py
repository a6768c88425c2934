"""
Target and feature resolution.

Expands the ``"*"`` wildcard against the registry (targets) or the
ConfigType enum (features), keeps caller order otherwise, and rejects
unknown names instead of dropping them.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Union

from .canonical_models import WILDCARD, CanonicalArtifact, ConfigType
from .errors import ConfigError
from .registry import ToolRegistry


def _is_wildcard(configured) -> bool:
    if configured is None or configured == WILDCARD:
        return True
    return WILDCARD in list(configured)


def resolve_targets(configured: Union[str, Sequence[str], None], registry: ToolRegistry,
                    config_type: Optional[ConfigType] = None) -> List[str]:
    """
    Resolve configured targets to concrete tool ids.

    Args:
        configured: Tool ids, or ``["*"]``/``"*"`` for every registered tool
        registry: Registry defining known tools and wildcard order
        config_type: When given, the wildcard only expands to tools
            supporting it, and explicit tools without it are dropped

    Raises:
        ConfigError: On an unknown tool id
    """
    if _is_wildcard(configured):
        if config_type is None:
            return registry.list_tools()
        return registry.get_tools_supporting(config_type)

    resolved: List[str] = []
    for tool in configured:
        if tool not in registry:
            known = ', '.join(registry.list_tools())
            raise ConfigError(f"Unknown target '{tool}'. Known targets: {known}")
        if tool in resolved:
            continue
        if config_type is not None and not registry.supports_config_type(tool, config_type):
            continue
        resolved.append(tool)
    return resolved


def resolve_features(configured: Union[str, Iterable[str], None]) -> List[ConfigType]:
    """
    Resolve feature names to ConfigTypes, wildcard expanding to every kind.

    Raises:
        ConfigError: On an unknown feature name
    """
    if _is_wildcard(configured):
        return list(ConfigType)

    resolved: List[ConfigType] = []
    for name in configured:
        try:
            config_type = ConfigType(name)
        except ValueError:
            known = ', '.join(ct.value for ct in ConfigType)
            raise ConfigError(f"Unknown feature '{name}'. Known features: {known}")
        if config_type not in resolved:
            resolved.append(config_type)
    return resolved


def features_for_target(tool: str, features: Union[str, List[str], None],
                        overrides: Optional[Dict[str, List[str]]] = None) -> List[ConfigType]:
    """Enabled features for one tool; a per-target list wins over the global list."""
    if overrides and tool in overrides:
        return resolve_features(overrides[tool])
    return resolve_features(features)


def filter_targeted(artifacts: Iterable[CanonicalArtifact], handler) -> List[CanonicalArtifact]:
    return [artifact for artifact in artifacts if handler.is_targeted(artifact)]
