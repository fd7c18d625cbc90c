"""
Tests for parser selection and fallback.

Run with: pytest backend/core/menu_parsing/tests/test_strategy.py -v
"""

from unittest.mock import patch

import pytest

from backend.core.config import settings
from backend.core.menu_parsing.errors import LLMUnavailableError
from backend.core.menu_parsing.llm_parser import LLMMenuParser
from backend.core.menu_parsing.models import WeeklyMenu
from backend.core.menu_parsing.parser import MenuParser, RuleBasedMenuParser
from backend.core.menu_parsing.strategy import FallbackMenuParser, get_parser

MENU_TEXT = "Monday Lunch 11am-1pm\nEntr\u00e9e\nPasta"


class FailingParser(MenuParser):
    name = "failing"

    def parse(self, text):
        raise LLMUnavailableError("service down")


class ExplodingParser(MenuParser):
    name = "exploding"

    def parse(self, text):
        raise RuntimeError("bug")


class TestGetParser:
    def test_default_is_rules(self):
        with patch.object(settings, "MENU_PARSER_BACKEND", "rules"):
            assert isinstance(get_parser(), RuleBasedMenuParser)

    def test_name_case_insensitive(self):
        assert isinstance(get_parser(" RULES "), RuleBasedMenuParser)

    def test_llm_with_fallback(self):
        parser = get_parser("llm", fallback=True)
        assert isinstance(parser, FallbackMenuParser)
        assert isinstance(parser.primary, LLMMenuParser)
        assert isinstance(parser.fallback, RuleBasedMenuParser)
        assert parser.name == "llm+rules"

    def test_llm_without_fallback(self):
        assert isinstance(get_parser("llm", fallback=False), LLMMenuParser)

    def test_fallback_from_settings(self):
        with patch.object(settings, "MENU_PARSER_FALLBACK", False):
            assert isinstance(get_parser("llm"), LLMMenuParser)

    def test_backend_from_settings(self):
        with patch.object(settings, "MENU_PARSER_BACKEND", "llm"), \
             patch.object(settings, "MENU_PARSER_FALLBACK", True):
            assert isinstance(get_parser(), FallbackMenuParser)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown menu parser"):
            get_parser("regex")


class TestFallbackMenuParser:
    def test_falls_back_on_parse_error(self):
        parser = FallbackMenuParser(FailingParser(), RuleBasedMenuParser())
        menu = parser.parse(MENU_TEXT)
        assert menu[0].meals[0].courses[0].food_items == "Pasta"

    def test_fallback_logged(self, caplog):
        parser = FallbackMenuParser(FailingParser(), RuleBasedMenuParser())
        with caplog.at_level("WARNING"):
            parser.parse(MENU_TEXT)
        assert "falling back to rules" in caplog.text

    def test_primary_result_used(self):
        parser = FallbackMenuParser(RuleBasedMenuParser(), FailingParser())
        assert isinstance(parser.parse(MENU_TEXT), WeeklyMenu)

    def test_other_errors_propagate(self):
        parser = FallbackMenuParser(ExplodingParser(), RuleBasedMenuParser())
        with pytest.raises(RuntimeError):
            parser.parse(MENU_TEXT)

    def test_llm_without_key_falls_back(self):
        with patch("backend.core.llm.check_available", return_value=False):
            menu = get_parser("llm", fallback=True).parse(MENU_TEXT)
        assert len(menu) == 1
