"""Handler bases shared by the per-tool adapters."""

from .command_handler import MarkdownCommandHandler
from .config_type_handler import ConfigTypeHandler, ValidationResult
from .hooks_handler import JsonHooksHandler
from .ignore_handler import IgnoreFileHandler
from .mcp_handler import McpJsonHandler, dump_json_document, load_json_document
from .rule_handler import DEFAULT_ROOT_GLOBS, MarkdownRuleHandler
from .subagent_handler import MarkdownSubagentHandler
from .toml_utils import dump_toml_document, load_toml_document

__all__ = [
    'ConfigTypeHandler',
    'DEFAULT_ROOT_GLOBS',
    'IgnoreFileHandler',
    'JsonHooksHandler',
    'MarkdownCommandHandler',
    'MarkdownRuleHandler',
    'MarkdownSubagentHandler',
    'McpJsonHandler',
    'ValidationResult',
    'dump_json_document',
    'dump_toml_document',
    'load_json_document',
    'load_toml_document',
]
