"""
Food item sanitizer.

Strips OCR artifacts, legal marks, decorative glyphs and bullet markers
from a single menu line. An empty result means the line carried no food
item and should be dropped.
"""

import re
from typing import Optional

from .rules import MenuRules, default_rules

# Ordered (name, pattern). Matches are replaced by a space; whitespace is
# collapsed afterwards so removals never join neighbouring words.
ARTIFACT_PATTERNS = [
    ("slash_brackets", re.compile(r"\[\\?/?/?\]")),
    ("arrow_brackets", re.compile(r"\[(?:>>?|<<?)\]|\((?:>>|<<)\)")),
    ("empty_brackets", re.compile(r"\[\]|\(\)|\{\}")),
    ("legal_marks", re.compile("[\u00ae\u00a9\u2122\u2120]")),
    ("dietary_marks", re.compile(r"[\[(][Vv]{1,2}[\])]")),
    ("symbol_runs", re.compile(r"\[[-\\/|*+>]+\]|\([-\\/|*+>]+\)")),
    ("page_markers", re.compile(r"\(\d\)")),
    ("at_runs", re.compile(r"@@\)|@+")),
    ("shapes", re.compile("[\u25ba\u25bc\u25b2\u25c4\u25ca\u2666\u25aa\u25ab\u25a0\u25a1\u25cf\u25cb]")),
    ("marks", re.compile("[\u2605\u2606\u2713\u2714\u274c\u00d7\u26a0\u26a1]\ufe0f?")),
    ("emoji", re.compile("[\U0001f300-\U0001f9ff\u2600-\u26ff\u2700-\u27bf]\ufe0f?")),
    # Runs after the glyph removals so a glyph next to a letter cannot
    # leave a new isolated capital behind.
    ("isolated_capitals", re.compile(r"\s+[A-Z](?=\s|$)")),
]

SPACE_BEFORE_COMMA = re.compile(r"\s+,")
DOUBLED_COMMAS = re.compile(r",(?:\s*,)+")
WHITESPACE_RUNS = re.compile(r"\s+")
LEADING_COMMAS = re.compile(r"^[,\s]+")
TRAILING_COMMA = re.compile(r",\s*$")
LEADING_BULLETS = re.compile(r"^(?:[-\u2022*]\s*)+")
TRAILING_AT = re.compile(r"\s*@\s*$")

MAX_PASSES = 5


def cut_notice(line: str, rules: Optional[MenuRules] = None) -> str:
    """Drop notice text that starts partway through ``line``."""
    rules = rules or default_rules()
    offset = rules.notice_offset(line)
    if offset is None:
        return line
    return line[:offset].strip()


def remove_ocr_artifacts(text: str) -> str:
    for _name, pattern in ARTIFACT_PATTERNS:
        text = pattern.sub(" ", text)

    text = SPACE_BEFORE_COMMA.sub(",", text)
    text = DOUBLED_COMMAS.sub(",", text)
    text = WHITESPACE_RUNS.sub(" ", text)
    text = LEADING_COMMAS.sub("", text)
    text = TRAILING_COMMA.sub("", text)
    return text.strip()


def clean_food_item(line: str, rules: Optional[MenuRules] = None) -> str:
    """
    Clean a raw food line.

    Already clean text comes back unchanged. Returns an empty string when
    nothing but artifacts or notice text was present.
    """
    # Anchored notice labels ("Deli Bar", "... Salad Bar") may only surface
    # once artifacts and bullets are gone, so repeat until nothing changes.
    text = line
    for _ in range(MAX_PASSES):
        cleaned = _clean_once(text, rules)
        if cleaned == text:
            break
        text = cleaned
    return text


def _clean_once(line: str, rules: Optional[MenuRules]) -> str:
    text = remove_ocr_artifacts(cut_notice(line, rules))
    text = LEADING_BULLETS.sub("", text)
    text = TRAILING_AT.sub("", text)
    text = TRAILING_COMMA.sub("", text)
    return text.strip()
