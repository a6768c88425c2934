"""
Canonical source tree: parsing, serialization and loading.

Layout under ``<base_dir>/.agentsync/``:
- rules/**/*.md, commands/**/*.md, subagents/**/*.md: frontmatter + body
- skills/<name>/SKILL.md plus auxiliary files
- ignore.yaml (preferred) or .aiignore
- mcp.json, hooks.json

Parsing is per file. ``CanonicalStore.load`` collects parse/validation
errors instead of raising them, so one bad file never hides its siblings.
``serialize`` is the exact inverse of parsing for unchanged data.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .canonical_models import (
    CANONICAL_DIR, CanonicalArtifact, CanonicalCommand, CanonicalHooks, CanonicalIgnore,
    CanonicalMcp, CanonicalRule, CanonicalSkill, CanonicalSubagent, ConfigType,
)
from .errors import FilesystemError, ParseError, SyncError, ValidationError
from .frontmatter import parse_frontmatter, stringify_frontmatter
from .ignore_rules import (
    parse_ignore_text, parse_ignore_yaml, render_ignore_text, render_ignore_yaml,
)
from .schemas import (
    CommandFrontmatter, HooksDocument, McpDocument, RuleFrontmatter, SkillFrontmatter,
    SubagentFrontmatter, dump_model, validate_model,
)

RULES_DIR = f'{CANONICAL_DIR}/rules'
COMMANDS_DIR = f'{CANONICAL_DIR}/commands'
SUBAGENTS_DIR = f'{CANONICAL_DIR}/subagents'
SKILLS_DIR = f'{CANONICAL_DIR}/skills'
IGNORE_TEXT_FILE = '.aiignore'
IGNORE_YAML_FILE = 'ignore.yaml'
MCP_FILE = 'mcp.json'
HOOKS_FILE = 'hooks.json'
SKILL_FILE = 'SKILL.md'
ROOT_RULE_FILE = 'overview.md'

MARKDOWN_DIRS = {
    ConfigType.RULES: RULES_DIR,
    ConfigType.COMMANDS: COMMANDS_DIR,
    ConfigType.SUBAGENTS: SUBAGENTS_DIR,
}


# ---------------------------------------------------------------------------
# Parsing


def _attach_blocks(artifact: CanonicalArtifact, model) -> CanonicalArtifact:
    for tool, block in model.tool_blocks().items():
        artifact.add_metadata(tool, block)
    return artifact


def parse_rule(content: str, relative_file_path: str, base_dir: Path = Path('.')) -> CanonicalRule:
    label = f"{RULES_DIR}/{relative_file_path}"
    frontmatter, body = parse_frontmatter(content, label)
    model = validate_model(RuleFrontmatter, frontmatter, label)
    rule = CanonicalRule(
        body=body,
        root=model.root,
        description=model.description,
        globs=model.globs,
        targets=model.targets,
        base_dir=base_dir,
        relative_dir_path=RULES_DIR,
        relative_file_path=relative_file_path,
    )
    return _attach_blocks(rule, model)


def parse_command(content: str, relative_file_path: str,
                  base_dir: Path = Path('.')) -> CanonicalCommand:
    label = f"{COMMANDS_DIR}/{relative_file_path}"
    frontmatter, body = parse_frontmatter(content, label)
    model = validate_model(CommandFrontmatter, frontmatter, label)
    command = CanonicalCommand(
        body=body,
        description=model.description,
        targets=model.targets,
        base_dir=base_dir,
        relative_dir_path=COMMANDS_DIR,
        relative_file_path=relative_file_path,
    )
    return _attach_blocks(command, model)


def parse_subagent(content: str, relative_file_path: str,
                   base_dir: Path = Path('.')) -> CanonicalSubagent:
    label = f"{SUBAGENTS_DIR}/{relative_file_path}"
    frontmatter, body = parse_frontmatter(content, label)
    model = validate_model(SubagentFrontmatter, frontmatter, label)
    subagent = CanonicalSubagent(
        name=model.name,
        description=model.description,
        body=body,
        targets=model.targets,
        base_dir=base_dir,
        relative_dir_path=SUBAGENTS_DIR,
        relative_file_path=relative_file_path,
    )
    return _attach_blocks(subagent, model)


def parse_skill(dir_name: str, main_content: str, other_files: Dict[str, str] = None,
                base_dir: Path = Path('.')) -> CanonicalSkill:
    label = f"{SKILLS_DIR}/{dir_name}/{SKILL_FILE}"
    frontmatter, body = parse_frontmatter(main_content, label)
    model = validate_model(SkillFrontmatter, frontmatter, label)
    skill = CanonicalSkill(
        name=model.name,
        description=model.description,
        body=body,
        other_files=other_files,
        targets=model.targets,
        base_dir=base_dir,
        relative_dir_path=SKILLS_DIR,
        relative_file_path=dir_name,
    )
    return _attach_blocks(skill, model)


def parse_ignore(content: str, yaml_format: bool = False,
                 base_dir: Path = Path('.')) -> Tuple[CanonicalIgnore, List[str]]:
    if yaml_format:
        rules, warnings = parse_ignore_yaml(content)
        file_name = IGNORE_YAML_FILE
    else:
        rules, warnings = parse_ignore_text(content)
        file_name = IGNORE_TEXT_FILE
    ignore = CanonicalIgnore(rules=rules, base_dir=base_dir,
                             relative_dir_path=CANONICAL_DIR,
                             relative_file_path=file_name)
    return ignore, warnings


def _load_json(content: str, label: str) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}", label)


def parse_mcp(content: str, base_dir: Path = Path('.')) -> CanonicalMcp:
    label = f"{CANONICAL_DIR}/{MCP_FILE}"
    document = validate_model(McpDocument, _load_json(content, label), label)
    servers = {name: dump_model(server) for name, server in document.mcpServers.items()}
    return CanonicalMcp(servers=servers, base_dir=base_dir,
                        relative_dir_path=CANONICAL_DIR, relative_file_path=MCP_FILE)


def parse_hooks(content: str, base_dir: Path = Path('.')) -> CanonicalHooks:
    label = f"{CANONICAL_DIR}/{HOOKS_FILE}"
    data = _load_json(content, label)
    document = validate_model(HooksDocument, data, label)
    hooks = {event: [dump_model(d) for d in defs] for event, defs in document.hooks.items()}
    artifact = CanonicalHooks(hooks=hooks, version=document.version, base_dir=base_dir,
                              relative_dir_path=CANONICAL_DIR, relative_file_path=HOOKS_FILE)

    # Tool override blocks share the shared-hooks schema
    for tool, block in (document.model_extra or {}).items():
        if not isinstance(block, dict):
            continue
        override = validate_model(HooksDocument, {'hooks': block.get('hooks') or {}},
                                  f"{label}#{tool}")
        artifact.add_metadata(tool, {
            'hooks': {event: [dump_model(d) for d in defs]
                      for event, defs in override.hooks.items()}
        })
    return artifact


# ---------------------------------------------------------------------------
# Serialization


def _with_blocks(frontmatter: Dict[str, Any], artifact: CanonicalArtifact) -> Dict[str, Any]:
    for tool in sorted(artifact.metadata):
        frontmatter[tool] = artifact.metadata[tool]
    return frontmatter


def serialize(artifact: CanonicalArtifact) -> str:
    """Render a canonical artifact back to its source file content."""
    if isinstance(artifact, CanonicalRule):
        frontmatter = {
            'root': artifact.root,
            'targets': artifact.targets,
            'description': artifact.description,
            'globs': artifact.globs,
        }
        return stringify_frontmatter(_with_blocks(frontmatter, artifact), artifact.body)

    if isinstance(artifact, CanonicalCommand):
        frontmatter = {'targets': artifact.targets, 'description': artifact.description}
        return stringify_frontmatter(_with_blocks(frontmatter, artifact), artifact.body)

    if isinstance(artifact, CanonicalSubagent):
        frontmatter = {
            'targets': artifact.targets,
            'name': artifact.name,
            'description': artifact.description,
        }
        return stringify_frontmatter(_with_blocks(frontmatter, artifact), artifact.body)

    if isinstance(artifact, CanonicalSkill):
        frontmatter = {
            'name': artifact.name,
            'description': artifact.description,
            'targets': artifact.targets,
        }
        return stringify_frontmatter(_with_blocks(frontmatter, artifact), artifact.body)

    if isinstance(artifact, CanonicalIgnore):
        if artifact.relative_file_path == IGNORE_YAML_FILE:
            return render_ignore_yaml(artifact.rules)
        return render_ignore_text(artifact.rules)

    if isinstance(artifact, CanonicalMcp):
        return json.dumps({'mcpServers': artifact.servers}, indent=2) + '\n'

    if isinstance(artifact, CanonicalHooks):
        document = {'version': artifact.version, 'hooks': artifact.hooks}
        return json.dumps(_with_blocks(document, artifact), indent=2) + '\n'

    raise ValueError(f"Unsupported artifact type: {type(artifact).__name__}")


def canonical_files(artifact: CanonicalArtifact) -> List[Tuple[str, str, str]]:
    """
    Files that make up a canonical artifact.

    Returns:
        List of (relative_dir_path, relative_file_path, content)
    """
    if isinstance(artifact, CanonicalSkill):
        skill_dir = f"{artifact.relative_dir_path}/{artifact.dir_name}"
        files = [(skill_dir, SKILL_FILE, serialize(artifact))]
        for rel_path in sorted(artifact.other_files):
            files.append((skill_dir, rel_path, artifact.other_files[rel_path]))
        return files
    return [(artifact.relative_dir_path, artifact.relative_file_path, serialize(artifact))]


# ---------------------------------------------------------------------------
# Loading


def read_text(path: Path) -> str:
    """Read a UTF-8 file, mapping OS failures to FilesystemError."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise ParseError(f"Not a UTF-8 text file: {e}", path)
    except OSError as e:
        raise FilesystemError(path, e)


@dataclass
class LoadResult:
    artifacts: List[CanonicalArtifact] = field(default_factory=list)
    errors: List[SyncError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class CanonicalStore:
    """Reads the canonical artifacts of one base directory."""

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)

    @property
    def root(self) -> Path:
        return self.base_dir / CANONICAL_DIR

    def exists(self) -> bool:
        return self.root.is_dir()

    def path_for(self, artifact: CanonicalArtifact) -> Path:
        return self.base_dir / artifact.relative_dir_path / artifact.relative_file_path

    def load(self, config_type: ConfigType) -> LoadResult:
        """
        Load every canonical artifact of ``config_type``.

        Per-file ParseError/ValidationError are collected in the result;
        FilesystemError propagates.
        """
        if config_type in MARKDOWN_DIRS:
            result = self._load_markdown(config_type)
            if config_type == ConfigType.RULES:
                self._check_single_root(result)
            return result
        if config_type == ConfigType.SKILLS:
            return self._load_skills()
        if config_type == ConfigType.IGNORE:
            return self._load_ignore()
        if config_type == ConfigType.MCP:
            return self._load_single(MCP_FILE, parse_mcp)
        if config_type == ConfigType.HOOKS:
            return self._load_single(HOOKS_FILE, parse_hooks)
        raise ValueError(f"Unsupported config type: {config_type}")

    def _load_markdown(self, config_type: ConfigType) -> LoadResult:
        parsers = {
            ConfigType.RULES: parse_rule,
            ConfigType.COMMANDS: parse_command,
            ConfigType.SUBAGENTS: parse_subagent,
        }
        parser = parsers[config_type]
        directory = self.base_dir / MARKDOWN_DIRS[config_type]
        result = LoadResult()
        if not directory.is_dir():
            return result

        for file_path in sorted(directory.rglob('*.md')):
            if not file_path.is_file():
                continue
            relative = file_path.relative_to(directory).as_posix()
            try:
                result.artifacts.append(parser(read_text(file_path), relative, self.base_dir))
            except (ParseError, ValidationError) as e:
                result.errors.append(e)
        return result

    def _check_single_root(self, result: LoadResult):
        roots = [a for a in result.artifacts if a.root]
        for extra in roots[1:]:
            result.artifacts.remove(extra)
            result.errors.append(ValidationError(
                f"Multiple root rules found; '{roots[0].relative_file_path}' is already root",
                f"{RULES_DIR}/{extra.relative_file_path}",
            ))

    def _load_skills(self) -> LoadResult:
        directory = self.base_dir / SKILLS_DIR
        result = LoadResult()
        if not directory.is_dir():
            return result

        for skill_dir in sorted(p for p in directory.iterdir() if p.is_dir()):
            main_file = skill_dir / SKILL_FILE
            if not main_file.is_file():
                result.warnings.append(f"Skipping {skill_dir.name}: no {SKILL_FILE}")
                continue
            try:
                other_files = {
                    p.relative_to(skill_dir).as_posix(): read_text(p)
                    for p in sorted(skill_dir.rglob('*'))
                    if p.is_file() and p != main_file
                }
                result.artifacts.append(
                    parse_skill(skill_dir.name, read_text(main_file), other_files, self.base_dir))
            except (ParseError, ValidationError) as e:
                result.errors.append(e)
        return result

    def _load_ignore(self) -> LoadResult:
        result = LoadResult()
        yaml_path = self.root / IGNORE_YAML_FILE
        text_path = self.root / IGNORE_TEXT_FILE
        if yaml_path.is_file():
            path, yaml_format = yaml_path, True
        elif text_path.is_file():
            path, yaml_format = text_path, False
        else:
            return result

        try:
            ignore, warnings = parse_ignore(read_text(path), yaml_format, self.base_dir)
        except (ParseError, ValidationError) as e:
            result.errors.append(e)
            return result
        result.artifacts.append(ignore)
        result.warnings.extend(warnings)
        return result

    def _load_single(self, file_name: str, parser) -> LoadResult:
        result = LoadResult()
        path = self.root / file_name
        if not path.is_file():
            return result
        try:
            result.artifacts.append(parser(read_text(path), self.base_dir))
        except (ParseError, ValidationError) as e:
            result.errors.append(e)
        return result
