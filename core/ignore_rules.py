"""
Ignore rule parsing, merging and rendering.

Two canonical formats are accepted:
- ``.agentsync/.aiignore``: one pattern per line, ``#`` comments, optional
  ``Read(p)``/``Write(p)``/``Edit(p)`` wrappers. Bare lines mean ``read``.
- ``.agentsync/ignore.yaml``: ``{version: 1, rules: [{path, actions}]}``.

Both parsers return ``(rules, warnings)`` with rules merged per path, sorted
by path and with actions in read/write/edit order.
"""

import re
from typing import Dict, Iterable, List, Set, Tuple

import yaml

from .canonical_models import IGNORE_ACTION_ORDER, IgnoreAction, IgnoreRule
from .errors import ParseError, ValidationError

WRAPPER_PATTERN = re.compile(r'^([A-Za-z][A-Za-z0-9]*)\((.*)\)$')

WRAPPER_NAMES = {
    IgnoreAction.READ: 'Read',
    IgnoreAction.WRITE: 'Write',
    IgnoreAction.EDIT: 'Edit',
}

YAML_FILE_LABEL = '.agentsync/ignore.yaml'


def normalize_action(value: str):
    """Map ``'Read'``/``' edit '`` etc. to an IgnoreAction, or None."""
    try:
        return IgnoreAction(value.strip().lower())
    except ValueError:
        return None


def merge_ignore_rules(rules: Iterable[IgnoreRule]) -> List[IgnoreRule]:
    merged: Dict[str, Set[IgnoreAction]] = {}
    for rule in rules:
        path = rule.path.strip()
        if not path:
            continue
        merged.setdefault(path, set()).update(rule.actions)

    return [
        IgnoreRule(path=path, actions=[a for a in IGNORE_ACTION_ORDER if a in actions])
        for path, actions in sorted(merged.items())
        if actions
    ]


def parse_ignore_text(content: str) -> Tuple[List[IgnoreRule], List[str]]:
    """Parse gitignore-style text with optional action wrappers."""
    warnings: List[str] = []
    rules: List[IgnoreRule] = []

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith('#'):
            continue

        match = WRAPPER_PATTERN.match(line)
        if not match:
            rules.append(IgnoreRule(path=line, actions=[IgnoreAction.READ]))
            continue

        wrapper, path = match.group(1), match.group(2).strip()
        action = normalize_action(wrapper)
        if action is None:
            warnings.append(
                f'Unsupported ignore action wrapper "{wrapper}" in line "{line}". '
                f'Supported actions: read, write, edit.'
            )
            continue
        if not path:
            warnings.append(f'Ignore rule "{line}" has an empty path and was skipped.')
            continue
        rules.append(IgnoreRule(path=path, actions=[action]))

    return merge_ignore_rules(rules), warnings


def parse_ignore_yaml(content: str) -> Tuple[List[IgnoreRule], List[str]]:
    """
    Parse the structured ignore document.

    Raises:
        ParseError: If the YAML is malformed
        ValidationError: If the document shape is wrong
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ParseError(f"Invalid YAML: {e}", YAML_FILE_LABEL)

    if not isinstance(data, dict):
        raise ValidationError("expected a YAML object at root", YAML_FILE_LABEL)
    if data.get('version') != 1:
        raise ValidationError(
            f"expected version to be 1, received {data.get('version')}", YAML_FILE_LABEL)
    raw_rules = data.get('rules')
    if not isinstance(raw_rules, list):
        raise ValidationError("expected rules to be an array", YAML_FILE_LABEL)

    warnings: List[str] = []
    rules: List[IgnoreRule] = []

    for index, raw in enumerate(raw_rules):
        if not isinstance(raw, dict):
            raise ValidationError(
                f"rules[{index}] must be an object with path/actions", YAML_FILE_LABEL)
        path = raw.get('path').strip() if isinstance(raw.get('path'), str) else ''
        if not path:
            raise ValidationError(
                f"rules[{index}].path must be a non-empty string", YAML_FILE_LABEL)

        raw_actions = raw.get('actions')
        if raw_actions is None:
            warnings.append(
                f'rules[{index}] has no actions and defaulted to [read] for path "{path}".')
            actions = [IgnoreAction.READ]
        elif not isinstance(raw_actions, list):
            raise ValidationError(
                f"rules[{index}].actions must be an array of strings", YAML_FILE_LABEL)
        else:
            actions = []
            for value in raw_actions:
                if not isinstance(value, str):
                    raise ValidationError(
                        f"rules[{index}].actions must only contain strings", YAML_FILE_LABEL)
                action = normalize_action(value)
                if action is None:
                    warnings.append(
                        f'Unsupported ignore action "{value}" for path "{path}". '
                        f'Supported actions: read, write, edit.'
                    )
                    continue
                if action not in actions:
                    actions.append(action)

        if not actions:
            warnings.append(f'Path "{path}" has no supported actions and was skipped.')
            continue
        rules.append(IgnoreRule(path=path, actions=actions))

    return merge_ignore_rules(rules), warnings


def render_ignore_text(rules: List[IgnoreRule]) -> str:
    """Render rules as ``.aiignore`` text; read-only rules stay bare."""
    lines = []
    for rule in rules:
        if rule.actions == [IgnoreAction.READ]:
            lines.append(rule.path)
            continue
        for action in rule.actions:
            lines.append(f"{WRAPPER_NAMES[action]}({rule.path})")
    return '\n'.join(lines) + '\n' if lines else ''


def wrap_patterns(rules: List[IgnoreRule]) -> List[str]:
    """Every (action, path) pair as ``Action(path)``."""
    return [f"{WRAPPER_NAMES[action]}({rule.path})"
            for rule in rules for action in rule.actions]


def render_ignore_yaml(rules: List[IgnoreRule]) -> str:
    """Render rules as the ``ignore.yaml`` document."""
    document = {
        'version': 1,
        'rules': [{'path': rule.path, 'actions': [a.value for a in rule.actions]}
                  for rule in rules],
    }
    return yaml.safe_dump(document, sort_keys=False, default_flow_style=False,
                          allow_unicode=True)
