"""
Rule-based weekly menu parser.

Pipeline: normalize -> split into day blocks -> interpret each block's
header -> classify the remaining lines into courses. A block whose header
has no recoverable time is skipped and reported, never raised.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .classifier import CourseClassifier, LineKind
from .headers import HeaderInfo, interpret_header, resolve_block_header
from .models import Course, MealSession, MenuDay, SkippedBlock, WeeklyMenu
from .normalizer import normalize_text
from .rules import MenuRules, get_rules
from .segmenter import DayBlock, extract_day_blocks

logger = logging.getLogger(__name__)

SKIP_REASON_NO_TIME = "no service time found in header"


class MenuParser(ABC):
    """
    Interface for turning menu text into a WeeklyMenu.

    Implementations are interchangeable; the caller picks one through
    configuration (see ``strategy.get_parser``).
    """

    name: str = "base"

    @abstractmethod
    def parse(self, text: str) -> WeeklyMenu:
        """
        Parse raw menu text.

        Args:
            text: OCR or PDF extracted text

        Returns:
            WeeklyMenu, possibly with zero days
        """
        pass


class RuleBasedMenuParser(MenuParser):
    """Deterministic parser driven by the YAML rule tables."""

    name = "rules"

    def __init__(self, rules: Optional[MenuRules] = None):
        self.rules = rules or get_rules()

    def parse(self, text: str) -> WeeklyMenu:
        normalized = normalize_text(text if isinstance(text, str) else "")
        blocks = extract_day_blocks(normalized, self.rules)

        days: list[MenuDay] = []
        skipped: list[SkippedBlock] = []

        for block_index, block in enumerate(blocks):
            day = self.parse_block(block, day_index=len(days))
            if day is None:
                logger.warning(f"Skipping day block {block_index}: could not parse time info from '{block[0]}'")
                skipped.append(SkippedBlock(block_index, block[0], SKIP_REASON_NO_TIME))
            else:
                days.append(day)

        menu = WeeklyMenu(days=tuple(days), skipped=tuple(skipped))
        counts = menu.summary()
        logger.info(
            f"Parsed menu: {counts['days']} days, {counts['sessions']} sessions, "
            f"{counts['courses']} courses, {counts['skipped']} skipped blocks"
        )
        return menu

    def parse_block(self, block: DayBlock, day_index: int) -> Optional[MenuDay]:
        """Build one day from a block, or None when its header has no time."""
        header, consumed = resolve_block_header(block, self.rules)
        if header is None:
            return None

        day_name = self.rules.find_weekday(block[0]) or block[0]
        sessions: list[MealSession] = []
        classifier = CourseClassifier(rules=self.rules)

        for line in block[consumed:]:
            kind = classifier.feed(line)
            if classifier.halted:
                break
            if kind is LineKind.SESSION_HEADER:
                sessions.append(_session(len(sessions), header, classifier.finish()))
                header = interpret_header(line, self.rules)
                classifier = CourseClassifier(rules=self.rules)

        sessions.append(_session(len(sessions), header, classifier.finish()))
        return MenuDay(day_index=day_index, day_name=day_name, meals=tuple(sessions))


def _session(index: int, header: HeaderInfo, courses: list[Course]) -> MealSession:
    return MealSession(
        session_index=index,
        time_of_day=header.time_of_day,
        start_time=header.start_time,
        end_time=header.end_time,
        courses=tuple(courses),
    )


def parse(raw_text: str, rules: Optional[MenuRules] = None) -> WeeklyMenu:
    """Parse menu text with the rule-based parser."""
    return RuleBasedMenuParser(rules).parse(raw_text)
