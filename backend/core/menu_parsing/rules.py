"""
Rule tables for the rule-based menu parser.

The tables are declarative YAML - edit the file, not the code. Each ordered
table is compiled into ``TaggedMatcher`` entries (pattern + canonical
result) so control flow never hard-codes a phrase.
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml

from backend.core.config import settings

from .errors import RuleConfigError
from .models import TimeOfDay

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent / "config"
DEFAULT_RULES_PATH = CONFIG_PATH / "menu_rules.yaml"

REQUIRED_KEYS = (
    "weekdays",
    "time_of_day",
    "course_headers",
    "course_types",
    "notice_lines",
    "notice_inline",
)


@dataclass(frozen=True)
class TaggedMatcher:
    """A compiled pattern and the value it stands for."""
    pattern: re.Pattern
    value: str

    def search(self, text: str) -> Optional[re.Match]:
        return self.pattern.search(text)


@dataclass(frozen=True)
class MenuRules:
    """Compiled rule tables used by every parsing stage."""
    weekdays: tuple[TaggedMatcher, ...]
    time_of_day: tuple[TaggedMatcher, ...]
    default_time_of_day: TimeOfDay
    course_headers: tuple[str, ...]
    course_types: tuple[TaggedMatcher, ...]
    implicit_course_type: str
    notice_lines: tuple[re.Pattern, ...]
    notice_inline: tuple[re.Pattern, ...]

    # --- Weekdays ---

    def find_weekday(self, line: str) -> Optional[str]:
        """Return the weekday that occurs earliest in ``line``."""
        best = None
        best_pos = None
        for matcher in self.weekdays:
            match = matcher.search(line)
            if match and (best_pos is None or match.start() < best_pos):
                best, best_pos = matcher.value, match.start()
        return best

    def is_day_boundary(self, line: str) -> bool:
        return any(m.search(line) for m in self.weekdays)

    # --- Meal periods ---

    def match_time_of_day(self, text: str) -> Optional[TimeOfDay]:
        for matcher in self.time_of_day:
            if matcher.search(text):
                return TimeOfDay(matcher.value)
        return None

    # --- Courses ---

    def is_course_header(self, line: str) -> bool:
        lowered = line.lower()
        return any(label in lowered for label in self.course_headers)

    def canonical_course_type(self, label: str) -> str:
        label = label.strip()
        for matcher in self.course_types:
            if matcher.search(label):
                return matcher.value
        return label

    # --- Notices ---

    def is_notice_line(self, line: str) -> bool:
        return any(p.search(line) for p in self.notice_lines)

    def notice_offset(self, line: str) -> Optional[int]:
        """Position where inline notice text begins, or None."""
        starts = [m.start() for m in (p.search(line) for p in self.notice_inline) if m]
        return min(starts) if starts else None


def _compile(pattern: str, key: str) -> re.Pattern:
    if not isinstance(pattern, str) or not pattern:
        raise RuleConfigError(f"{key}: pattern must be a non-empty string, got {pattern!r}")
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise RuleConfigError(f"{key}: invalid pattern {pattern!r}: {e}") from e


def _tagged(entries, key: str) -> tuple[TaggedMatcher, ...]:
    if not isinstance(entries, list):
        raise RuleConfigError(f"{key}: expected a list")
    matchers = []
    for entry in entries:
        if not isinstance(entry, dict) or "pattern" not in entry or "value" not in entry:
            raise RuleConfigError(f"{key}: entries need 'pattern' and 'value', got {entry!r}")
        matchers.append(TaggedMatcher(_compile(entry["pattern"], key), str(entry["value"])))
    return tuple(matchers)


def _patterns(entries, key: str) -> tuple[re.Pattern, ...]:
    if not isinstance(entries, list):
        raise RuleConfigError(f"{key}: expected a list")
    return tuple(_compile(p, key) for p in entries)


def _time_of_day(value, key: str) -> TimeOfDay:
    try:
        return TimeOfDay(str(value).strip().lower())
    except ValueError as e:
        raise RuleConfigError(f"{key}: unknown time of day {value!r}") from e


def rules_from_dict(data: dict) -> MenuRules:
    """
    Compile a rule table mapping into ``MenuRules``.

    Raises:
        RuleConfigError: if a table is missing or malformed
    """
    if not isinstance(data, dict):
        raise RuleConfigError("Rule file must contain a mapping")
    missing = [k for k in REQUIRED_KEYS if k not in data]
    if missing:
        raise RuleConfigError(f"Rule file is missing: {', '.join(missing)}")

    weekdays = data["weekdays"]
    if not isinstance(weekdays, list) or not weekdays:
        raise RuleConfigError("weekdays: expected a non-empty list")

    time_of_day = _tagged(data["time_of_day"], "time_of_day")
    for matcher in time_of_day:
        _time_of_day(matcher.value, "time_of_day")

    headers = data["course_headers"]
    if not isinstance(headers, list) or not all(isinstance(h, str) and h.strip() for h in headers):
        raise RuleConfigError("course_headers: expected a list of labels")

    return MenuRules(
        weekdays=tuple(TaggedMatcher(_compile(re.escape(str(d)), "weekdays"), str(d)) for d in weekdays),
        time_of_day=time_of_day,
        default_time_of_day=_time_of_day(data.get("default_time_of_day", "lunch"), "default_time_of_day"),
        course_headers=tuple(h.strip().lower() for h in headers),
        course_types=_tagged(data["course_types"], "course_types"),
        implicit_course_type=str(data.get("implicit_course_type", "Main Items")),
        notice_lines=_patterns(data["notice_lines"], "notice_lines"),
        notice_inline=_patterns(data["notice_inline"], "notice_inline"),
    )


def load_rules(path: Optional[str | Path] = None) -> MenuRules:
    """
    Load rule tables from a YAML file.

    Args:
        path: Rule file; the packaged ``menu_rules.yaml`` when omitted

    Returns:
        Compiled MenuRules
    """
    path = Path(path) if path else DEFAULT_RULES_PATH
    if not path.exists():
        raise FileNotFoundError(f"Rule file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise RuleConfigError(f"Could not read rule file {path}: {e}") from e

    logger.debug(f"Loaded menu rules from {path}")
    return rules_from_dict(data)


@lru_cache
def default_rules() -> MenuRules:
    """Packaged rule tables, loaded once."""
    return load_rules(DEFAULT_RULES_PATH)


def get_rules(path: Optional[str | Path] = None) -> MenuRules:
    """Rules from ``path``, else MENU_RULES_PATH, else the packaged defaults."""
    path = path or settings.MENU_RULES_PATH
    if path:
        return load_rules(path)
    return default_rules()
