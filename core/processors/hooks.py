"""Hooks processor: single canonical hooks.json fanned out per tool."""

from core.canonical_models import CanonicalArtifact, ConfigType

from .base import FeatureProcessor


class HooksProcessor(FeatureProcessor):
    config_type = ConfigType.HOOKS
    single_file = True

    def is_empty(self, canonical: CanonicalArtifact) -> bool:
        return not canonical.hooks and not canonical.metadata
