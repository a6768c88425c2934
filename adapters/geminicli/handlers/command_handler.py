"""
Gemini CLI command handler.

Commands are TOML files in ``.gemini/commands/``:

description = "Review the staged diff"
prompt = '''
Review the following changes...
'''

Other keys round-trip through the ``geminicli`` extension block.
"""

from core.canonical_io import COMMANDS_DIR
from core.canonical_models import CanonicalCommand, ToolFile
from core.errors import ValidationError
from adapters.shared.command_handler import MarkdownCommandHandler
from adapters.shared.toml_utils import dump_toml_document, load_toml_document


class GeminiCommandHandler(MarkdownCommandHandler):
    """Handler for Gemini CLI TOML commands."""

    tool_name = 'geminicli'
    commands_dir = '.gemini/commands'
    global_commands_dir = '.gemini/commands'
    file_extension = '.toml'

    def render(self, command: CanonicalCommand) -> str:
        document = {'description': command.description or None, 'prompt': command.body}
        for key, value in (command.get_metadata(self.tool_name) or {}).items():
            document.setdefault(key, value)
        return dump_toml_document(document, multiline_strings=True)

    def to_canonical(self, tool_file: ToolFile) -> CanonicalCommand:
        document = load_toml_document(tool_file.content, tool_file.relative_path)
        prompt = document.pop('prompt', None)
        if not isinstance(prompt, str):
            raise ValidationError("'prompt' must be a string", tool_file.relative_path)
        description = document.pop('description', None) or ''

        command = CanonicalCommand(
            body=prompt.strip(),
            description=str(description),
            relative_dir_path=COMMANDS_DIR,
            relative_file_path=self.canonical_file_name(tool_file.relative_file_path),
        )
        if document:
            command.add_metadata(self.tool_name, document)
        return command
