"""Claude Code slash command handler (``.claude/commands/*.md``)."""

from adapters.shared.command_handler import MarkdownCommandHandler


class ClaudeCommandHandler(MarkdownCommandHandler):
    tool_name = 'claudecode'
    commands_dir = '.claude/commands'
    global_commands_dir = '.claude/commands'
