"""
Pydantic schemas for canonical documents.

Every canonical file is validated against one of these models before it is
usable. Frontmatter keys that are not part of a schema and hold a mapping
are per-tool extension blocks (``cursor: {alwaysApply: true}``) and are kept;
other unknown keys are dropped.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

CONTROL_CHARS = ('\n', '\r', '\0')

ModelT = TypeVar('ModelT', bound=BaseModel)


def _coerce_targets(value: Any) -> Any:
    if value is None:
        return ['*']
    if isinstance(value, str):
        return [value]
    return value


class FrontmatterModel(BaseModel):
    """Base for frontmatter schemas: targets plus preserved tool blocks."""

    model_config = ConfigDict(extra='allow')

    targets: List[str] = Field(default_factory=lambda: ['*'])

    @field_validator('targets', mode='before')
    @classmethod
    def _coerce(cls, v):
        return _coerce_targets(v)

    def tool_blocks(self) -> Dict[str, Dict[str, Any]]:
        """Extension blocks keyed by tool id."""
        extras = self.model_extra or {}
        return {key: value for key, value in extras.items() if isinstance(value, dict)}


class RuleFrontmatter(FrontmatterModel):
    root: bool = False
    description: str = ''
    globs: List[str] = Field(default_factory=list)

    @field_validator('description', mode='before')
    @classmethod
    def _none_description(cls, v):
        return '' if v is None else v

    @field_validator('globs', mode='before')
    @classmethod
    def _coerce_globs(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [g.strip() for g in v.split(',') if g.strip()]
        return v


class CommandFrontmatter(FrontmatterModel):
    description: str


class SubagentFrontmatter(FrontmatterModel):
    name: str
    description: str


class SkillFrontmatter(FrontmatterModel):
    name: str
    description: str


class HookDefinition(BaseModel):
    """One hook entry; unknown keys pass through to tool output."""

    model_config = ConfigDict(extra='allow')

    type: Optional[str] = None
    command: Optional[str] = None
    timeout: Optional[Union[int, float]] = None
    matcher: Optional[str] = None
    prompt: Optional[str] = None

    @field_validator('type')
    @classmethod
    def _check_type(cls, v):
        if v is not None and v not in ('command', 'prompt'):
            raise ValueError("must be 'command' or 'prompt'")
        return v

    @field_validator('command', 'matcher')
    @classmethod
    def _no_control_chars(cls, v):
        if v is not None and any(char in v for char in CONTROL_CHARS):
            raise ValueError("must not contain newline, carriage return, or NUL characters")
        return v


class HooksDocument(BaseModel):
    model_config = ConfigDict(extra='allow')

    version: int = 1
    hooks: Dict[str, List[HookDefinition]] = Field(default_factory=dict)


class McpServer(BaseModel):
    """Transport descriptor for one MCP server."""

    model_config = ConfigDict(extra='allow')

    type: Optional[str] = None
    command: Optional[Union[str, List[str]]] = None
    args: Optional[List[str]] = None
    env: Optional[Dict[str, str]] = None
    url: Optional[str] = None
    httpUrl: Optional[str] = None
    targets: Optional[List[str]] = None
    description: Optional[str] = None

    @model_validator(mode='after')
    def _require_transport(self):
        if not (self.command or self.url or self.httpUrl):
            raise ValueError("server needs either 'command' or 'url'")
        return self


class McpDocument(BaseModel):
    model_config = ConfigDict(extra='allow')

    mcpServers: Dict[str, McpServer] = Field(default_factory=dict)


def format_validation_error(error: PydanticValidationError) -> str:
    """Flatten pydantic errors into ``field: message; ...``."""
    parts = []
    for item in error.errors():
        location = '.'.join(str(loc) for loc in item['loc']) or '<root>'
        parts.append(f"{location}: {item['msg']}")
    return '; '.join(parts)


def validate_model(model_cls: Type[ModelT], data: Any, path: str = None) -> ModelT:
    """
    Validate ``data`` against ``model_cls``.

    Raises:
        ValidationError: With a flattened description of every failing field
    """
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(format_validation_error(e), path)


def dump_model(model: BaseModel) -> Dict[str, Any]:
    """Model as a plain dict with unset optional fields removed."""
    return model.model_dump(exclude_none=True)
