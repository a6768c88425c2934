"""Codex CLI custom prompts (``~/.codex/prompts/*.md``, global only)."""

from adapters.shared.command_handler import MarkdownCommandHandler


class CodexCommandHandler(MarkdownCommandHandler):
    tool_name = 'codexcli'
    supports_project = False
    commands_dir = '.codex/prompts'
    global_commands_dir = '.codex/prompts'
