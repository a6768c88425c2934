"""Cline ignore handler (``.clineignore``)."""

from core.canonical_models import RootPath
from adapters.shared.ignore_handler import IgnoreFileHandler


class ClineIgnoreHandler(IgnoreFileHandler):
    tool_name = 'cline'
    ignore_file = RootPath('.', '.clineignore')
