"""
Run context: verbosity, silence, dry-run and the logger callback.

A RunContext is created once per run by the caller (CLI, GUI, tests) and
passed down explicitly; nothing in the engine reads global logging state.
"""

from typing import Callable, List, Optional


class RunContext:
    """
    Logging and mode switches for one generate/import run.

    Args:
        verbose: Emit debug messages
        silent: Suppress everything except what the caller prints itself
        dry_run: Compute changes without touching the filesystem
        logger: Callable receiving each message (defaults to print)
    """

    def __init__(self, verbose: bool = False, silent: bool = False, dry_run: bool = False,
                 logger: Optional[Callable[[str], None]] = None):
        self.verbose = verbose and not silent
        self.silent = silent
        self.dry_run = dry_run
        self.logger = logger or print
        self.warnings: List[str] = []

    def info(self, message: str):
        if not self.silent:
            self.logger(message)

    def debug(self, message: str):
        if self.verbose:
            self.logger(f"  {message}")

    def warn(self, message: str):
        self.warnings.append(message)
        if not self.silent:
            self.logger(f"Warning: {message}")

    def error(self, message: str):
        if not self.silent:
            self.logger(f"Error: {message}")

    def action(self, verb: str, path) -> str:
        """``'Would write'`` in dry-run, ``'Wrote'`` otherwise."""
        past = {'write': 'Wrote', 'delete': 'Deleted'}[verb]
        message = f"Would {verb} {path}" if self.dry_run else f"{past} {path}"
        self.debug(message)
        return message
