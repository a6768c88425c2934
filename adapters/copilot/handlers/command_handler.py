"""GitHub Copilot prompt files (``.github/prompts/*.prompt.md``)."""

from adapters.shared.command_handler import MarkdownCommandHandler


class CopilotCommandHandler(MarkdownCommandHandler):
    tool_name = 'copilot'
    commands_dir = '.github/prompts'
    file_extension = '.prompt.md'
