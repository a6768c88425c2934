"""
Tool adapters for converting between tool-specific formats and the canonical
source in ``.agentsync/``.

Each adapter coordinates one handler per supported config type. A handler
knows how to:
- Declare where the tool keeps that kind of file (project and global scope)
- Convert canonical artifacts to tool files
- Convert tool files back to canonical artifacts
- Preserve tool-specific fields via the tool's extension block

Available adapters (registry order):
- AgentsMdAdapter: AGENTS.md convention
- ClaudeAdapter: Claude Code (.claude/, CLAUDE.md, .mcp.json)
- ClineAdapter: Cline (.clinerules/, .clineignore)
- CodexCliAdapter: OpenAI Codex CLI (AGENTS.md, ~/.codex/)
- CopilotAdapter: GitHub Copilot (.github/, .vscode/mcp.json)
- CursorAdapter: Cursor (.cursor/, .cursorignore)
- GeminiCliAdapter: Gemini CLI (GEMINI.md, .gemini/)
- KiroAdapter: Kiro (.kiro/, .aiignore)

Adding a new adapter:
1. Create adapters/<tool>/ with handlers built on adapters.shared
2. Subclass ToolAdapter and fill ``self._handlers``
3. Register it in create_default_registry()
"""

from core.registry import ToolRegistry

from .agentsmd import AgentsMdAdapter
from .claudecode import ClaudeAdapter
from .cline import ClineAdapter
from .codexcli import CodexCliAdapter
from .copilot import CopilotAdapter
from .cursor import CursorAdapter
from .geminicli import GeminiCliAdapter
from .kiro import KiroAdapter

ADAPTER_CLASSES = [
    AgentsMdAdapter,
    ClaudeAdapter,
    ClineAdapter,
    CodexCliAdapter,
    CopilotAdapter,
    CursorAdapter,
    GeminiCliAdapter,
    KiroAdapter,
]


def create_default_registry() -> ToolRegistry:
    """Registry with every built-in adapter, in wildcard expansion order."""
    registry = ToolRegistry()
    for adapter_class in ADAPTER_CLASSES:
        registry.register(adapter_class())
    return registry


__all__ = [
    'AgentsMdAdapter',
    'ClaudeAdapter',
    'ClineAdapter',
    'CodexCliAdapter',
    'CopilotAdapter',
    'CursorAdapter',
    'GeminiCliAdapter',
    'KiroAdapter',
    'ADAPTER_CLASSES',
    'create_default_registry',
]
