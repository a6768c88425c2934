"""
MCP processor.

Single-file kind: the tool's document is read before conversion so
handlers that merge into shared settings files can keep unrelated keys.
"""

from core.canonical_models import CanonicalArtifact, ConfigType

from .base import FeatureProcessor


class McpProcessor(FeatureProcessor):
    config_type = ConfigType.MCP
    single_file = True

    def is_empty(self, canonical: CanonicalArtifact) -> bool:
        return not canonical.servers
