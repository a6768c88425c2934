"""Subagents processor: one markdown file per subagent."""

from core.canonical_models import ConfigType

from .base import FeatureProcessor


class SubagentsProcessor(FeatureProcessor):
    config_type = ConfigType.SUBAGENTS
