"""
Main CLI entry point for the coding agent rules sync tool.

This module provides the command-line interface for generating every AI
coding tool's configuration from the canonical ``.agentsync/`` source and
for importing an existing tool's files back into it. It supports:
- Multiple tools (Claude Code, Cursor, Copilot, Codex CLI, ...)
- Multiple features (rules, ignore, mcp, commands, subagents, skills, hooks)
- Project and global (home directory) scope
- Dry-run mode and orphan cleanup

Usage:
    python -m cli.main generate --targets claudecode,cursor --features rules,mcp
    python -m cli.main import --target claudecode
    python -m cli.main list-tools
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from core.canonical_models import Scope
from core.config import SyncConfig, load_config, merge_cli_overrides
from core.context import RunContext
from core.errors import ConfigError, FilesystemError
from core.orchestrator import SyncOrchestrator
from core.registry import ToolRegistry
from core.report import SyncReport

from adapters import create_default_registry


def create_parser() -> argparse.ArgumentParser:
    """
    Create argument parser for CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description='Sync AI coding agent rules and settings from one canonical source',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate every tool's files from .agentsync/
  %(prog)s generate

  # Only Claude Code and Cursor rules and MCP servers, without writing
  %(prog)s generate --targets claudecode,cursor --features rules,mcp --dry-run

  # Write user-level files under the home directory
  %(prog)s generate --global

  # Bootstrap .agentsync/ from an existing Claude Code setup
  %(prog)s import --target claudecode
        """
    )

    parser.add_argument(
        '--gui',
        action='store_true',
        help='Launch the graphical user interface'
    )

    # Options shared by generate and import
    common = argparse.ArgumentParser(add_help=False)

    common.add_argument(
        '--targets',
        type=str,
        help='Comma-separated tool ids, or "*" for all (default: from config, else "*")'
    )

    common.add_argument(
        '--features',
        type=str,
        help='Comma-separated features, or "*" for all (default: from config, else "*")'
    )

    common.add_argument(
        '--base-dir',
        type=Path,
        action='append',
        help='Project directory holding .agentsync/ (repeatable, default: .)'
    )

    common.add_argument(
        '--config',
        type=Path,
        help='Path to the config file (default: ./agentsync.json)'
    )

    common.add_argument(
        '--global',
        dest='global_scope',
        action='store_true',
        help='Write user-level files under the home directory'
    )

    common.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be done without making changes'
    )

    common.add_argument(
        '--no-delete',
        action='store_true',
        help='Keep tool files that are no longer generated'
    )

    common.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose output with detailed logging'
    )

    common.add_argument(
        '--silent', '-s',
        action='store_true',
        help='Only print errors'
    )

    subparsers = parser.add_subparsers(dest='command', metavar='command')

    subparsers.add_parser(
        'generate',
        parents=[common],
        help='Generate tool files from the canonical source'
    )

    import_parser = subparsers.add_parser(
        'import',
        parents=[common],
        help="Import one tool's files into the canonical source"
    )
    import_parser.add_argument(
        '--target',
        type=str,
        required=True,
        help='Tool id to import from (e.g. claudecode)'
    )

    subparsers.add_parser(
        'list-tools',
        help='List supported tools and their features'
    )

    return parser


def setup_registry() -> ToolRegistry:
    """
    Initialize tool registry with all available adapters.

    Returns:
        ToolRegistry with registered adapters
    """
    return create_default_registry()


def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    if value is None:
        return None
    return [item.strip() for item in value.split(',') if item.strip()]


def build_config(args) -> SyncConfig:
    """
    Load the config file and apply command-line overrides.

    Raises:
        ConfigError: On an invalid or explicitly named but missing config file
    """
    if args.config and not args.config.expanduser().exists():
        raise ConfigError("Config file not found", args.config)
    config = load_config(args.config.expanduser() if args.config else None)

    return merge_cli_overrides(
        config,
        targets=_split_csv(args.targets),
        features=_split_csv(args.features),
        # --features replaces per-target lists from the file as well
        feature_overrides={} if args.features else None,
        base_dirs=[d.expanduser() for d in args.base_dir] if args.base_dir else None,
        scope=Scope.GLOBAL if args.global_scope else None,
        dry_run=True if args.dry_run else None,
        delete=False if args.no_delete else None,
        verbose=True if args.verbose else None,
        silent=True if args.silent else None,
    )


def list_tools(registry: ToolRegistry) -> int:
    """Print every registered tool with the features it supports."""
    for name in registry.list_tools():
        adapter = registry.get_adapter(name)
        features = ', '.join(ct.value for ct in adapter.supported_config_types)
        print(f"{name:<12} {adapter.display_name:<16} {features}")
    return 0


def print_summary(report: SyncReport, context: RunContext, action: str):
    """Print totals, then every collected error to stderr."""
    if report.dry_run:
        context.info(f"{action} (dry run): would write {report.total_written} file(s), "
                     f"would delete {report.total_deleted} file(s)")
    else:
        context.info(f"{action}: wrote {report.total_written} file(s), "
                     f"deleted {report.total_deleted} file(s)")

    errors = report.errors
    if errors:
        print(f"{len(errors)} error(s):", file=sys.stderr)
        for error in errors:
            print(f"  {error}", file=sys.stderr)


def main(argv: Optional[list] = None):
    """
    Main entry point for CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if argv is None:
        argv = sys.argv[1:]

    # Check for GUI launch conditions:
    # 1. Explicit --gui flag
    # 2. No arguments provided (default to GUI)
    if '--gui' in argv or not argv:
        try:
            from gui.main import start as start_gui
            start_gui()
            return 0
        except ImportError as e:
            print(f"Error: Could not import GUI: {e}", file=sys.stderr)
            print("Ensure nicegui is installed: pip install nicegui", file=sys.stderr)
            return 1
        except Exception as e:
            print(f"Error launching GUI: {e}", file=sys.stderr)
            return 1

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help(sys.stderr)
        return 1

    if args.command == 'list-tools':
        return list_tools(setup_registry())

    try:
        config = build_config(args)
        context = RunContext(verbose=config.verbose, silent=config.silent,
                             dry_run=config.dry_run)
        orchestrator = SyncOrchestrator(config, setup_registry(), context)

        if args.command == 'generate':
            report = orchestrator.generate()
            print_summary(report, context, 'Generate')
        else:
            report = orchestrator.import_tool(args.target)
            print_summary(report, context, f'Import from {args.target}')

        return 1 if report.has_fatal_errors else 0

    except (ConfigError, FilesystemError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nSync cancelled by user", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc(file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
