"""Cursor ignore handler (``.cursorignore``)."""

from core.canonical_models import RootPath
from adapters.shared.ignore_handler import IgnoreFileHandler


class CursorIgnoreHandler(IgnoreFileHandler):
    tool_name = 'cursor'
    ignore_file = RootPath('.', '.cursorignore')
