"""Pydantic v2 models for the day-indexed weekly menu interchange shape."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, field_validator

from .errors import LLMResponseError


class CoursePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    courseType: str
    foodItems: str

    @field_validator("foodItems", mode="before")
    @classmethod
    def join_item_lists(cls, value: Any) -> Any:
        # Some producers send a list; the stored form is one joined string.
        if isinstance(value, list):
            return ", ".join(str(v).strip() for v in value if str(v).strip())
        return value


class MealPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    timeOfDay: str
    startTime: str
    endTime: str
    courses: list[CoursePayload] = Field(default_factory=list)

    @field_validator("timeOfDay")
    @classmethod
    def lowercase_time_of_day(cls, value: str) -> str:
        return value.strip().lower()


class DayPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    dayName: str
    meals: list[MealPayload]


class WeeklyMenuPayload(RootModel[dict[int, DayPayload]]):
    """``{"<dayIndex>": {"id", "dayName", "meals": [...]}}``"""


def validate_menu_payload(data: Any) -> dict[str, dict]:
    """
    Structurally validate a menu payload.

    Returns:
        The payload re-serialized with string day keys

    Raises:
        LLMResponseError: if the payload does not have the expected shape
    """
    try:
        model = WeeklyMenuPayload.model_validate(data)
    except ValidationError as e:
        raise LLMResponseError(f"Menu payload failed validation: {e.error_count()} error(s): {e}") from e
    return {str(k): v.model_dump() for k, v in sorted(model.root.items())}
