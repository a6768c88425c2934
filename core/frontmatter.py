"""
YAML frontmatter helpers shared by the canonical store and the adapters.

File format:
---
key: value
---
Markdown body...
"""

import re
from typing import Any, Dict, Tuple

import yaml

from .errors import ParseError

FRONTMATTER_PATTERN = re.compile(r'^---\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|$)(.*)$', re.DOTALL)


def parse_frontmatter(content: str, path: str = None) -> Tuple[Dict[str, Any], str]:
    """
    Split content into a frontmatter dict and a stripped body.

    Content without a leading ``---`` block has empty frontmatter.

    Raises:
        ParseError: If the YAML block is malformed or not a mapping
    """
    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return {}, content.strip()

    yaml_content, body = match.groups()
    yaml_content = yaml_content or ''
    try:
        frontmatter = yaml.safe_load(yaml_content) if yaml_content.strip() else {}
    except yaml.YAMLError as e:
        raise ParseError(f"Invalid YAML frontmatter: {e}", path)

    if frontmatter is None:
        frontmatter = {}
    if not isinstance(frontmatter, dict):
        raise ParseError("Frontmatter must be a YAML mapping", path)

    return frontmatter, body.strip()


def stringify_frontmatter(frontmatter: Dict[str, Any], body: str) -> str:
    """Render frontmatter and body; ``None`` values are dropped."""
    cleaned = {k: v for k, v in frontmatter.items() if v is not None}
    body = body.strip()
    if not cleaned:
        return f"{body}\n"

    yaml_str = yaml.dump(cleaned, default_flow_style=False, sort_keys=False,
                         allow_unicode=True)
    return f"---\n{yaml_str}---\n{body}\n"
