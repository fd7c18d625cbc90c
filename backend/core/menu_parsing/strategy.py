"""
Parser selection.

The rule-based and network-backed parsers share the ``MenuParser``
interface. Which one runs is configuration (MENU_PARSER_BACKEND), and the
network parser can fall back to the rule parser so a partial menu is still
produced when the service fails.
"""

import logging
from pathlib import Path
from typing import Optional

from backend.core.config import settings

from .errors import MenuParseError
from .llm_parser import LLMMenuParser
from .models import WeeklyMenu
from .parser import MenuParser, RuleBasedMenuParser
from .rules import get_rules

logger = logging.getLogger(__name__)

PARSER_NAMES = ("rules", "llm")


class FallbackMenuParser(MenuParser):
    """Runs ``primary``; on a MenuParseError runs ``fallback`` instead."""

    def __init__(self, primary: MenuParser, fallback: MenuParser):
        self.primary = primary
        self.fallback = fallback
        self.name = f"{primary.name}+{fallback.name}"

    def parse(self, text: str) -> WeeklyMenu:
        try:
            return self.primary.parse(text)
        except MenuParseError as e:
            logger.warning(f"{self.primary.name} parser failed ({e}); falling back to {self.fallback.name}")
            return self.fallback.parse(text)


def get_parser(
    name: Optional[str] = None,
    fallback: Optional[bool] = None,
    rules_path: Optional[str | Path] = None,
) -> MenuParser:
    """
    Build the configured parser.

    Args:
        name: "rules" or "llm" (defaults to MENU_PARSER_BACKEND)
        fallback: Wrap the LLM parser with a rule-based fallback
                  (defaults to MENU_PARSER_FALLBACK)
        rules_path: Rule file override

    Raises:
        ValueError: for an unknown parser name
    """
    name = (name or settings.MENU_PARSER_BACKEND).strip().lower()
    if name not in PARSER_NAMES:
        raise ValueError(f"Unknown menu parser '{name}'. Expected one of: {', '.join(PARSER_NAMES)}")

    rule_parser = RuleBasedMenuParser(get_rules(rules_path))
    if name == "rules":
        return rule_parser

    fallback = settings.MENU_PARSER_FALLBACK if fallback is None else fallback
    if fallback:
        return FallbackMenuParser(LLMMenuParser(), rule_parser)
    return LLMMenuParser()
