"""
Test configuration and fixtures for the menu parser backend test suite.

Provides:
- FastAPI TestClient fixture
- Patched chat-completion client for parser fallback tests
"""
import json
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from backend.core.llm import Completion


MENU_TEXT = (
    "Monday\n"
    "Lunch 11:20am - 1pm\n"
    "Entr\u00e9e\n"
    "Pasta\n"
    "Chicken\n"
)

LLM_PAYLOAD = {
    "0": {
        "id": 0,
        "dayName": "Monday",
        "meals": [
            {
                "id": 0,
                "timeOfDay": "lunch",
                "startTime": "11:20am",
                "endTime": "1pm",
                "courses": [{"id": 0, "courseType": "Entr\u00e9e", "foodItems": "Pasta, Chicken, Salad"}],
            }
        ],
    }
}


@pytest.fixture()
def client():
    """Provide a FastAPI TestClient for the menu parsing app."""
    from backend.api.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def llm_ok():
    """Chat-completion client that answers with a valid menu payload."""
    completion = Completion(
        content="```json\n" + json.dumps(LLM_PAYLOAD) + "\n```",
        finish_reason="stop",
        model="grok-3-mini",
    )
    with patch("backend.core.llm.check_available", return_value=True), \
         patch("backend.core.llm.chat_completion", return_value=completion) as mock_chat:
        yield mock_chat


@pytest.fixture()
def llm_garbage():
    """Chat-completion client that answers with unusable text."""
    completion = Completion(content="Sorry, I can't do that.", finish_reason="stop")
    with patch("backend.core.llm.check_available", return_value=True), \
         patch("backend.core.llm.chat_completion", return_value=completion) as mock_chat:
        yield mock_chat
