"""
Cline rule handler.

Cline reads every markdown file in ``.clinerules/``; the root rule is
written there like any other rule.
"""

from adapters.shared.rule_handler import MarkdownRuleHandler


class ClineRuleHandler(MarkdownRuleHandler):
    tool_name = 'cline'
    non_root_dir = '.clinerules'
    fold_root_into_dir = True
