"""
Ignore processor.

Ignore files are project-local only; a global run reports a warning and
does nothing.
"""

from core.canonical_io import IGNORE_YAML_FILE
from core.canonical_models import CanonicalArtifact, ConfigType, Scope
from core.report import FeatureResult

from .base import FeatureProcessor


class IgnoreProcessor(FeatureProcessor):
    config_type = ConfigType.IGNORE
    single_file = True

    def generate(self) -> FeatureResult:
        if self.scope == Scope.GLOBAL:
            result = FeatureResult(self.config_type)
            self._warn(result, "ignore files are not supported in global mode")
            return result
        return super().generate()

    def is_empty(self, canonical: CanonicalArtifact) -> bool:
        return not canonical.rules

    def place_imported(self, canonical: CanonicalArtifact):
        # ignore.yaml wins on load
        if (self.store.root / IGNORE_YAML_FILE).is_file():
            canonical.relative_file_path = IGNORE_YAML_FILE
