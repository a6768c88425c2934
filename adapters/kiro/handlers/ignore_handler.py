"""Kiro ignore handler (``.aiignore``)."""

from core.canonical_models import RootPath
from adapters.shared.ignore_handler import IgnoreFileHandler


class KiroIgnoreHandler(IgnoreFileHandler):
    tool_name = 'kiro'
    ignore_file = RootPath('.', '.aiignore')
