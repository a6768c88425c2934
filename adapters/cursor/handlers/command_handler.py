"""Cursor command handler (``.cursor/commands/*.md``, plain markdown prompts)."""

from adapters.shared.command_handler import MarkdownCommandHandler


class CursorCommandHandler(MarkdownCommandHandler):
    tool_name = 'cursor'
    commands_dir = '.cursor/commands'
    global_commands_dir = '.cursor/commands'
    with_frontmatter = False
