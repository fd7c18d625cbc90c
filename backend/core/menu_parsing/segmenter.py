"""Splits normalized menu text into one block per weekday occurrence."""

from typing import Optional

from .rules import MenuRules, default_rules

DayBlock = list[str]


def extract_day_blocks(text: str, rules: Optional[MenuRules] = None) -> list[DayBlock]:
    """
    Split text into day blocks.

    A line naming a weekday starts a new block and belongs to it. Blank
    lines are dropped. Lines before the first weekday line form no block
    and are discarded.

    Returns:
        Blocks of trimmed, non-empty lines in source order
    """
    rules = rules or default_rules()
    blocks: list[DayBlock] = []
    current: Optional[DayBlock] = None

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        if rules.is_day_boundary(line):
            if current:
                blocks.append(current)
            current = [line]
        elif current is not None:
            current.append(line)

    if current:
        blocks.append(current)

    return blocks
