"""Commands processor: one markdown file per slash command."""

from core.canonical_models import ConfigType

from .base import FeatureProcessor


class CommandsProcessor(FeatureProcessor):
    config_type = ConfigType.COMMANDS
