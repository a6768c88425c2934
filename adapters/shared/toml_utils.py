"""TOML helpers for tools that keep their configuration in TOML."""

import tomllib
from typing import Any, Dict, Optional

import tomli_w

from core.errors import ParseError


def load_toml_document(content: Optional[str], label: str) -> Dict[str, Any]:
    """Parse a TOML document, treating missing/blank content as ``{}``."""
    if content is None or not content.strip():
        return {}
    try:
        return tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ParseError(f"Invalid TOML: {e}", label)


def dump_toml_document(data: Dict[str, Any], multiline_strings: bool = False) -> str:
    """Serialize ``data``; TOML has no null so ``None`` values are dropped."""
    return tomli_w.dumps(_drop_none(data), multiline_strings=multiline_strings)


def _drop_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_none(v) for v in value if v is not None]
    return value
