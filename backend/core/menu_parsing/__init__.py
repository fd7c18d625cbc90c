# Weekly menu parsing: OCR/PDF text -> days -> meal sessions -> courses

from .models import TimeOfDay, Course, MealSession, MenuDay, SkippedBlock, WeeklyMenu
from .errors import MenuParseError, RuleConfigError, LLMUnavailableError, LLMResponseError
from .rules import MenuRules, TaggedMatcher, load_rules, get_rules, default_rules
from .normalizer import normalize_text
from .segmenter import extract_day_blocks
from .headers import HeaderInfo, interpret_header, resolve_block_header, extract_time_range
from .sanitizer import clean_food_item, remove_ocr_artifacts
from .classifier import CourseClassifier, CourseState, LineKind, classify_line, classify_courses
from .parser import MenuParser, RuleBasedMenuParser, parse
from .llm_parser import LLMMenuParser
from .strategy import FallbackMenuParser, get_parser, PARSER_NAMES

__version__ = "1.0.0"

__all__ = [
    # Models
    "TimeOfDay",
    "Course",
    "MealSession",
    "MenuDay",
    "SkippedBlock",
    "WeeklyMenu",
    # Errors
    "MenuParseError",
    "RuleConfigError",
    "LLMUnavailableError",
    "LLMResponseError",
    # Rules
    "MenuRules",
    "TaggedMatcher",
    "load_rules",
    "get_rules",
    "default_rules",
    # Stages
    "normalize_text",
    "extract_day_blocks",
    "HeaderInfo",
    "interpret_header",
    "resolve_block_header",
    "extract_time_range",
    "clean_food_item",
    "remove_ocr_artifacts",
    "CourseClassifier",
    "CourseState",
    "LineKind",
    "classify_line",
    "classify_courses",
    # Parsers
    "MenuParser",
    "RuleBasedMenuParser",
    "LLMMenuParser",
    "FallbackMenuParser",
    "get_parser",
    "PARSER_NAMES",
    "parse",
]
