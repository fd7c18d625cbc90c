"""
Data models for weekly menu parsing.

All structured data uses frozen dataclasses so a parsed menu cannot be
changed after it is returned. Collections are tuples for the same reason.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class TimeOfDay(Enum):
    """Meal period of a session."""
    BREAKFAST = "breakfast"
    BRUNCH = "brunch"
    LUNCH = "lunch"
    DINNER = "dinner"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "TimeOfDay":
        """Map free text to a member. Unknown labels resolve to LUNCH."""
        if label:
            value = label.strip().lower()
            for member in cls:
                if member.value == value:
                    return member
        return cls.LUNCH


@dataclass(frozen=True)
class Course:
    """A named category of food items within a session."""
    course_index: int
    course_type: str
    food_items: str  # comma-and-space joined

    @property
    def items(self) -> list[str]:
        """Food items split back into a list."""
        return [i for i in self.food_items.split(", ") if i]

    def to_dict(self) -> dict:
        return {
            "id": self.course_index,
            "courseType": self.course_type,
            "foodItems": self.food_items,
        }


@dataclass(frozen=True)
class MealSession:
    """A time-bounded eating period within a day."""
    session_index: int
    time_of_day: TimeOfDay
    start_time: str
    end_time: str
    courses: tuple[Course, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.session_index,
            "timeOfDay": self.time_of_day.value,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "courses": [c.to_dict() for c in self.courses],
        }


@dataclass(frozen=True)
class MenuDay:
    """One weekday occurrence with its meal sessions."""
    day_index: int
    day_name: str
    meals: tuple[MealSession, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.day_index,
            "dayName": self.day_name,
            "meals": [m.to_dict() for m in self.meals],
        }


@dataclass(frozen=True)
class SkippedBlock:
    """A day block left out of the result because its header had no time."""
    block_index: int
    header: str
    reason: str

    def to_dict(self) -> dict:
        return {
            "blockIndex": self.block_index,
            "header": self.header,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class WeeklyMenu:
    """
    Parsed weekly menu.

    Days are ordered by their appearance in the source text, not by
    calendar order. ``skipped`` lists blocks that could not become a day.
    """
    days: tuple[MenuDay, ...] = ()
    skipped: tuple[SkippedBlock, ...] = field(default=(), compare=False)

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self):
        return iter(self.days)

    def __getitem__(self, day_index: int) -> MenuDay:
        for day in self.days:
            if day.day_index == day_index:
                return day
        raise KeyError(day_index)

    @property
    def is_empty(self) -> bool:
        return not self.days

    def to_dict(self) -> dict[str, Any]:
        """Day-indexed interchange shape consumed by storage and review."""
        return {str(day.day_index): day.to_dict() for day in self.days}

    @classmethod
    def from_dict(cls, data: dict) -> "WeeklyMenu":
        """
        Build a menu from a day-indexed payload.

        The payload must already be structurally valid (see
        ``schemas.validate_menu_payload``). Days are ordered by their
        numeric key.
        """
        days = []
        for key in sorted(data, key=lambda k: int(k)):
            day = data[key]
            meals = tuple(
                MealSession(
                    session_index=int(meal["id"]),
                    time_of_day=TimeOfDay.from_label(meal.get("timeOfDay")),
                    start_time=meal["startTime"],
                    end_time=meal["endTime"],
                    courses=tuple(
                        Course(
                            course_index=int(course["id"]),
                            course_type=course["courseType"],
                            food_items=course["foodItems"],
                        )
                        for course in meal.get("courses", [])
                    ),
                )
                for meal in day.get("meals", [])
            )
            days.append(MenuDay(day_index=int(day.get("id", key)), day_name=day["dayName"], meals=meals))
        return cls(days=tuple(days))

    def summary(self) -> dict[str, int]:
        """Counts used for logging and CLI output."""
        sessions = sum(len(d.meals) for d in self.days)
        courses = sum(len(m.courses) for d in self.days for m in d.meals)
        return {
            "days": len(self.days),
            "sessions": sessions,
            "courses": courses,
            "skipped": len(self.skipped),
        }
