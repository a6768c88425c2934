"""
Error taxonomy for the sync engine.

Errors fall into two groups:
- Per-artifact errors (ParseError, ValidationError) are collected into the
  run report and never abort sibling artifacts.
- Contract and I/O errors (UnsupportedOperationError, FilesystemError,
  ConfigError) stop the work they belong to: one (tool, config type) pair,
  the whole run, or the run before it starts.
"""

from pathlib import Path
from typing import Optional, Union


class SyncError(Exception):
    """Base exception for all sync engine errors."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.message = message
        self.path = str(path) if path is not None else None

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class ParseError(SyncError):
    """Malformed frontmatter or document structure in a single file."""


class ValidationError(SyncError):
    """Document parsed but failed its schema constraints."""


class ConfigError(SyncError):
    """Invalid configuration (unknown target, unknown feature, bad config file)."""


class UnsupportedOperationError(SyncError):
    """
    A handler was asked for a conversion it declares unsupported.

    Fatal for the (tool, config type) pair that raised it only.
    """

    def __init__(self, tool: str, config_type, message: str,
                 path: Optional[Union[str, Path]] = None):
        self.tool = tool
        self.config_type = config_type
        kind = getattr(config_type, 'value', config_type)
        super().__init__(f"[{tool}/{kind}] {message}", path)


class FilesystemError(SyncError):
    """I/O failure during load, write or delete. Fatal to the run."""

    def __init__(self, path: Union[str, Path], cause: Optional[BaseException] = None,
                 message: Optional[str] = None):
        self.cause = cause
        text = message or (str(cause) if cause else "filesystem operation failed")
        super().__init__(text, path)
