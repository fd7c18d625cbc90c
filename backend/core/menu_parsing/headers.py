"""Meal-session header interpretation: time of day and service times."""

import re
from dataclasses import dataclass
from typing import Optional

from .models import TimeOfDay
from .rules import MenuRules, default_rules

# Hour, optional minutes, optional am/pm. Never part of a date like 10/14.
_TIME = r"(?<![\d/:.])\d{1,2}(?::[0-5]\d)?(?:\s?[ap]\.?m\b\.?)?(?![\d/])"
_DASH = r"\s*[-\N{EN DASH}\N{EM DASH}]\s*"

TIME_RANGE = re.compile("(" + _TIME + ")" + _DASH + "(" + _TIME + ")", re.IGNORECASE)
TIME_SINGLE = re.compile(
    r"(?<![\d/:.])\d{1,2}(?::[0-5]\d(?:\s?[ap]\.?m\b\.?)?|\s?[ap]\.?m\b\.?)(?![\d/])",
    re.IGNORECASE,
)
_MERIDIEM = re.compile(r"[ap]\.?m", re.IGNORECASE)


@dataclass(frozen=True)
class HeaderInfo:
    time_of_day: TimeOfDay
    start_time: str
    end_time: str


def _is_clock_time(token: str) -> bool:
    return ":" in token or bool(_MERIDIEM.search(token))


def _find_range(line: str) -> Optional[tuple[str, str]]:
    for match in TIME_RANGE.finditer(line):
        start, end = match.group(1).strip(), match.group(2).strip()
        if _is_clock_time(start) or _is_clock_time(end):
            return start, end
    return None


def extract_time_range(line: str) -> Optional[tuple[str, str]]:
    """
    Find service times in a header line.

    A dash-separated pair wins; otherwise a single time is used for both
    start and end. A bare number pair such as "1-2" is not a time range.
    """
    times = _find_range(line)
    if times is not None:
        return times

    single = TIME_SINGLE.search(line)
    if single:
        token = single.group(0).strip()
        return token, token

    return None


def resolve_time_of_day(text: str, rules: Optional[MenuRules] = None) -> TimeOfDay:
    rules = rules or default_rules()
    return rules.match_time_of_day(text) or rules.default_time_of_day


def interpret_header(line: str, rules: Optional[MenuRules] = None) -> Optional[HeaderInfo]:
    """
    Extract meal-session metadata from a header line.

    Returns:
        HeaderInfo, or None when no time can be recovered; the caller
        skips the block in that case
    """
    times = extract_time_range(line)
    if times is None:
        return None
    return HeaderInfo(
        time_of_day=resolve_time_of_day(line, rules),
        start_time=times[0],
        end_time=times[1],
    )


def resolve_block_header(
    lines: list[str], rules: Optional[MenuRules] = None
) -> tuple[Optional[HeaderInfo], int]:
    """
    Interpret the header of a day block.

    The weekday line is the header. When it carries no time but the next
    line does (meal period printed below the weekday), both lines form the
    header and the meal period is looked up across both.

    Returns:
        (HeaderInfo or None, number of lines consumed by the header)
    """
    if not lines:
        return None, 0
    rules = rules or default_rules()

    info = interpret_header(lines[0], rules)
    if info is not None:
        return info, 1

    if len(lines) > 1 and not rules.is_notice_line(lines[1]):
        times = extract_time_range(lines[1])
        if times is not None:
            combined = f"{lines[0]} {lines[1]}"
            return HeaderInfo(resolve_time_of_day(combined, rules), times[0], times[1]), 2

    return None, 1


def is_session_header(line: str, rules: Optional[MenuRules] = None) -> bool:
    """
    A line naming a meal period and carrying a time range opens a new
    session. A single time is not enough, so "Brunch Waffles till 2pm"
    stays a food item.
    """
    rules = rules or default_rules()
    return rules.match_time_of_day(line) is not None and _find_range(line) is not None
