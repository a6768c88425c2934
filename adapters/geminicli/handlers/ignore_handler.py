"""Gemini CLI ignore handler (``.geminiignore``)."""

from core.canonical_models import RootPath
from adapters.shared.ignore_handler import IgnoreFileHandler


class GeminiIgnoreHandler(IgnoreFileHandler):
    tool_name = 'geminicli'
    ignore_file = RootPath('.', '.geminiignore')
