"""
Network-backed menu parser.

Delegates the text -> WeeklyMenu transformation to a chat-completion model,
then unwraps the JSON payload from whatever prose or code fences surround it
and validates its structure before returning.
"""

import json
import logging
import re
from typing import Optional

from backend.core import llm

from .errors import LLMResponseError, LLMUnavailableError
from .models import WeeklyMenu
from .parser import MenuParser
from .schemas import validate_menu_payload

logger = logging.getLogger(__name__)

PARSING_INSTRUCTIONS = """Parse menu text into JSON. Output ONLY JSON, no explanations. Schema:

{
  "0": {
    "id": 0,
    "dayName": "Monday",
    "meals": [
      {
        "id": 0,
        "timeOfDay": "breakfast",
        "startTime": "7:00am",
        "endTime": "9:30am",
        "courses": [
          {
            "id": 0,
            "courseType": "Entrée",
            "foodItems": "Pancakes, French Toast, Scrambled Eggs"
          }
        ]
      }
    ]
  }
}

Rules:
- Days: numeric keys 0,1,2... in the order they appear. dayName: Monday,Tuesday...
- timeOfDay: breakfast,brunch,lunch,dinner
- Times: "7:00am", "11:20am", "1pm"
- courseType: "Entrée","International Station","Salads of the Day","Soups of the Day","Pasta Station","Dessert","Main Items"
- foodItems: one string, items separated by ", "
- Clean OCR artifacts: remove [symbols], @@, *, bullets
- Stop at "Notice" sections

Return ONLY JSON, no text."""

CODE_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)
JSON_OBJECT = re.compile(r"\{[\s\S]*\}")
TRAILING_COMMAS = re.compile(r",\s*([}\]])")


def extract_json_payload(content: str) -> str:
    """
    Pull the JSON text out of a model response.

    Tries a fenced code block, then the outermost {...} span, then strips
    everything before the first '{' and after the last '}'.
    """
    fenced = CODE_FENCE.search(content)
    if fenced and fenced.group(1).strip():
        logger.debug("Found JSON in code block")
        return fenced.group(1).strip()

    obj = JSON_OBJECT.search(content)
    if obj:
        logger.debug("Found JSON object pattern")
        return obj.group(0)

    logger.debug("Cleaned up content for JSON extraction")
    return re.sub(r"[^}]*$", "", re.sub(r"^[^{]*", "", content)).strip()


def extract_json_permissive(content: str) -> Optional[str]:
    """Greedy outermost object across the whole response, trailing commas removed."""
    obj = JSON_OBJECT.search(content)
    if not obj:
        return None
    return TRAILING_COMMAS.sub(r"\1", obj.group(0))


def _load_menu(payload: str) -> dict:
    data = json.loads(payload)
    return validate_menu_payload(data)


class LLMMenuParser(MenuParser):
    """Parser backed by the chat-completion service."""

    name = "llm"

    def __init__(
        self,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        timeout: Optional[int] = None,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout

    def parse(self, text: str) -> WeeklyMenu:
        if not llm.check_available():
            raise LLMUnavailableError("XAI_API_KEY environment variable is not set")

        completion = llm.chat_completion(
            messages=[
                {"role": "system", "content": PARSING_INSTRUCTIONS},
                {
                    "role": "user",
                    "content": (
                        "Parse this menu text into the required JSON format. "
                        f"Respond with ONLY the JSON object, no other text:\n\n{text}"
                    ),
                },
            ],
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            timeout=self.timeout,
        )
        if completion is None:
            raise LLMUnavailableError("Chat-completion request failed")

        if completion.finish_reason == "length":
            raise LLMResponseError(
                "Response was truncated due to max_tokens limit",
                raw_response=completion.content,
            )

        content = completion.content
        if not content or not content.strip():
            raise LLMResponseError(
                f"No content received from model. Finish reason: {completion.finish_reason}",
                raw_response=content,
            )

        menu_data = self._decode(content)
        menu = WeeklyMenu.from_dict(menu_data)
        logger.info(f"Parsed menu with {completion.model or 'LLM'}: {len(menu)} days")
        return menu

    def _decode(self, content: str) -> dict:
        """Extract and validate the payload, retrying once permissively."""
        try:
            return _load_menu(extract_json_payload(content))
        except (json.JSONDecodeError, LLMResponseError) as first_error:
            logger.warning(f"JSON extraction failed, retrying permissively: {first_error}")

        payload = extract_json_permissive(content)
        if payload is not None:
            try:
                return _load_menu(payload)
            except (json.JSONDecodeError, LLMResponseError) as e:
                logger.error(f"Permissive JSON extraction failed: {e}")

        raise LLMResponseError(
            f"Failed to parse JSON response from model. Raw response: {content[:500]}",
            raw_response=content,
        )
