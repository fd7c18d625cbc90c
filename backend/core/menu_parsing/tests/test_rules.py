"""
Tests for loading and querying the rule tables.

Run with: pytest backend/core/menu_parsing/tests/test_rules.py -v
"""

from unittest.mock import patch

import pytest
import yaml

from backend.core.config import settings
from backend.core.menu_parsing.errors import RuleConfigError
from backend.core.menu_parsing.models import TimeOfDay
from backend.core.menu_parsing.parser import RuleBasedMenuParser
from backend.core.menu_parsing.rules import (
    DEFAULT_RULES_PATH,
    default_rules,
    get_rules,
    load_rules,
    rules_from_dict,
)


@pytest.fixture()
def rule_data():
    with open(DEFAULT_RULES_PATH, encoding="utf-8") as f:
        return yaml.safe_load(f)


def _write(path, data):
    path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")
    return path


# ============================================================================
# Packaged rules
# ============================================================================

class TestDefaultRules:
    def test_loaded_once(self):
        assert default_rules() is default_rules()

    def test_weekdays(self):
        rules = default_rules()
        assert [m.value for m in rules.weekdays][0] == "Monday"
        assert len(rules.weekdays) == 7

    def test_earliest_weekday_wins(self):
        assert default_rules().find_weekday("Menu for Tuesday and Monday") == "Tuesday"

    def test_weekday_case_insensitive(self):
        assert default_rules().is_day_boundary("MONDAY")
        assert not default_rules().is_day_boundary("Pasta")

    def test_time_of_day_order(self):
        rules = default_rules()
        assert rules.match_time_of_day("Breakfast and Lunch") is TimeOfDay.BREAKFAST
        assert rules.match_time_of_day("Pasta") is None
        assert rules.default_time_of_day is TimeOfDay.LUNCH

    def test_canonical_course_type(self):
        rules = default_rules()
        assert rules.canonical_course_type("INTEMATIONAL STATION") == "International Station"
        assert rules.canonical_course_type("International Station") == "International Station"
        assert rules.canonical_course_type("intemational station") == "International Station"
        assert rules.canonical_course_type(" Appetizer ") == "Appetizer"

    def test_notice_offset(self):
        rules = default_rules()
        assert rules.notice_offset("Chips Notice: x") == 6
        assert rules.notice_offset("Chips") is None

    def test_notice_offset_earliest_match(self):
        line = "Fries Symbols to identify Notice"
        assert default_rules().notice_offset(line) == 6


# ============================================================================
# Loading errors
# ============================================================================

class TestLoadErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_rules(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text("weekdays: [Monday\n", encoding="utf-8")
        with pytest.raises(RuleConfigError):
            load_rules(path)

    def test_not_a_mapping(self):
        with pytest.raises(RuleConfigError):
            rules_from_dict(["Monday"])

    def test_missing_table(self, rule_data):
        del rule_data["notice_lines"]
        with pytest.raises(RuleConfigError, match="notice_lines"):
            rules_from_dict(rule_data)

    def test_bad_pattern(self, rule_data):
        rule_data["notice_inline"].append("([unclosed")
        with pytest.raises(RuleConfigError, match="invalid pattern"):
            rules_from_dict(rule_data)

    def test_entry_without_value(self, rule_data):
        rule_data["course_types"].append({"pattern": "grill"})
        with pytest.raises(RuleConfigError):
            rules_from_dict(rule_data)

    def test_unknown_time_of_day(self, rule_data):
        rule_data["time_of_day"].append({"pattern": "supper", "value": "supper"})
        with pytest.raises(RuleConfigError, match="supper"):
            rules_from_dict(rule_data)

    def test_rule_errors_are_parse_errors(self):
        from backend.core.menu_parsing.errors import MenuParseError
        assert issubclass(RuleConfigError, MenuParseError)


# ============================================================================
# Custom rules
# ============================================================================

class TestCustomRules:
    def test_custom_vocabulary(self, tmp_path, rule_data):
        rule_data["weekdays"].append("Montag")
        rule_data["course_headers"].append("grill")
        rule_data["course_types"].insert(0, {"pattern": "grill", "value": "Grill Station"})
        path = _write(tmp_path / "rules.yaml", rule_data)

        menu = RuleBasedMenuParser(load_rules(path)).parse("Montag Lunch 11am-1pm\nGrill\nBratwurst")
        assert menu[0].day_name == "Montag"
        assert menu[0].meals[0].courses[0].course_type == "Grill Station"

    def test_custom_implicit_course(self, rule_data):
        rule_data["implicit_course_type"] = "Featured"
        menu = RuleBasedMenuParser(rules_from_dict(rule_data)).parse("Monday Lunch 11am-1pm\nPasta")
        assert menu[0].meals[0].courses[0].course_type == "Featured"

    def test_get_rules_uses_setting(self, tmp_path, rule_data):
        rule_data["weekdays"] = ["Caturday"]
        path = _write(tmp_path / "rules.yaml", rule_data)

        with patch.object(settings, "MENU_RULES_PATH", str(path)):
            rules = get_rules()
        assert rules.find_weekday("Caturday") == "Caturday"
        assert rules.find_weekday("Monday") is None

    def test_get_rules_default(self):
        with patch.object(settings, "MENU_RULES_PATH", ""):
            assert get_rules() is default_rules()
