"""
Rules processor.

Global scope only syncs the root rule (tools read one user-level
instructions file); non-root rules are skipped with a warning.
"""

from typing import List

from core.canonical_models import CanonicalArtifact, ConfigType, Scope
from core.report import FeatureResult

from .base import FeatureProcessor


class RulesProcessor(FeatureProcessor):
    config_type = ConfigType.RULES

    def prepare_canonical(self, artifacts: List[CanonicalArtifact],
                          result: FeatureResult) -> List[CanonicalArtifact]:
        if self.scope != Scope.GLOBAL:
            return artifacts

        kept = []
        for rule in artifacts:
            if rule.root:
                kept.append(rule)
            else:
                self._warn(result, f"{rule.relative_file_path} is not a root rule; "
                                   f"only the root rule is used in global mode")
        return kept
