"""
Course classification for the lines of one meal session.

A small state machine: lines either open a course (course-type header),
add to the open course (food item), or end the block (notice text).
Unlabeled items before the first header go to an implicit course so they
are never dropped.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .headers import is_session_header
from .models import Course
from .rules import MenuRules, default_rules
from .sanitizer import clean_food_item


class CourseState(Enum):
    NO_COURSE_OPEN = "no_course_open"
    COURSE_OPEN = "course_open"
    HALTED = "halted"  # notice reached; the rest of the block is ignored


class LineKind(Enum):
    BLANK = "blank"
    NOTICE = "notice"
    SESSION_HEADER = "session_header"
    COURSE_HEADER = "course_header"
    FOOD_ITEM = "food_item"


def classify_line(line: str, rules: Optional[MenuRules] = None) -> LineKind:
    """
    Classify a block line. Checks run in priority order: notice text
    first, then session headers, then course headers.
    """
    rules = rules or default_rules()
    line = line.strip()
    if not line:
        return LineKind.BLANK
    if rules.is_notice_line(line):
        return LineKind.NOTICE
    if is_session_header(line, rules):
        return LineKind.SESSION_HEADER
    if rules.is_course_header(line):
        return LineKind.COURSE_HEADER
    return LineKind.FOOD_ITEM


@dataclass
class CourseClassifier:
    """
    Accumulates courses for one meal session.

    Feed lines with ``feed``; read the result with ``finish``. Session
    headers are not consumed: ``feed`` reports them so the caller can
    start a new session with a fresh classifier.
    """
    rules: MenuRules = field(default_factory=default_rules)
    state: CourseState = CourseState.NO_COURSE_OPEN
    course_type: Optional[str] = None
    pending_items: list[str] = field(default_factory=list)
    courses: list[Course] = field(default_factory=list)

    @property
    def halted(self) -> bool:
        return self.state is CourseState.HALTED

    def feed(self, line: str) -> LineKind:
        """Apply one line and return how it was classified."""
        if self.halted:
            return LineKind.NOTICE

        kind = classify_line(line, self.rules)

        if kind is LineKind.NOTICE:
            self._close_course()
            self.state = CourseState.HALTED
        elif kind is LineKind.COURSE_HEADER:
            self._close_course()
            self._open_course(self.rules.canonical_course_type(line))
        elif kind is LineKind.FOOD_ITEM:
            if self.state is CourseState.NO_COURSE_OPEN:
                self._open_course(self.rules.implicit_course_type)
            item = clean_food_item(line, self.rules)
            if item:
                self.pending_items.append(item)

        return kind

    def finish(self) -> list[Course]:
        """Close any open course and return the session's courses."""
        self._close_course()
        if not self.halted:
            self.state = CourseState.NO_COURSE_OPEN
        return list(self.courses)

    def _open_course(self, course_type: str) -> None:
        self.course_type = course_type
        self.pending_items = []
        self.state = CourseState.COURSE_OPEN

    def _close_course(self) -> None:
        if self.state is CourseState.COURSE_OPEN and self.pending_items:
            self.courses.append(Course(
                course_index=len(self.courses),
                course_type=self.course_type,
                food_items=", ".join(self.pending_items),
            ))
        self.pending_items = []


def classify_courses(lines: list[str], rules: Optional[MenuRules] = None) -> list[Course]:
    """Courses for a run of lines, stopping at the first notice line."""
    classifier = CourseClassifier(rules=rules or default_rules())
    for line in lines:
        classifier.feed(line)
        if classifier.halted:
            break
    return classifier.finish()
