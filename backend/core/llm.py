"""
Chat-completion client for the xAI Grok API.

Provides consistent interface for:
- Structured generation (menu text -> JSON)
- Model availability checking

The endpoint is OpenAI-compatible: requests carry a ``messages`` list and
responses carry ``choices[0].message.content`` plus a ``finish_reason``.
"""
import logging
import time
from dataclasses import dataclass
from typing import Optional, List, Dict, Any

import requests

from .config import settings

logger = logging.getLogger(__name__)


@dataclass
class Completion:
    """Content and metadata of a single chat completion."""
    content: str
    finish_reason: Optional[str]
    model: Optional[str] = None
    raw: Optional[dict] = None


def _headers() -> dict:
    """Build headers for chat-completion requests."""
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {settings.XAI_API_KEY}",
    }


def check_available() -> bool:
    """
    Check if the chat-completion service is configured.

    Availability depends on having an API key; no request is made so that
    status endpoints stay cheap.
    """
    return bool(settings.XAI_API_KEY)


def _extract_completion(data: dict) -> Completion:
    choices = data.get("choices") or [{}]
    choice = choices[0] or {}
    message = choice.get("message") or {}
    return Completion(
        content=message.get("content") or "",
        finish_reason=choice.get("finish_reason"),
        model=data.get("model"),
        raw=data,
    )


def chat_completion(
    messages: List[Dict[str, str]],
    model: Optional[str] = None,
    max_tokens: Optional[int] = None,
    temperature: Optional[float] = None,
    timeout: Optional[int] = None,
    max_retries: Optional[int] = None,
) -> Optional[Completion]:
    """
    Send a chat-completion request.

    Transport errors and 5xx responses are retried up to ``max_retries``
    additional times with a short linear backoff. Client errors (4xx) are
    not retried.

    Args:
        messages: List of {"role": ..., "content": ...} dicts
        model: Model to use (defaults to XAI_MODEL)
        max_tokens: Maximum tokens to generate
        temperature: Sampling temperature (0.0-1.0)
        timeout: Request timeout in seconds
        max_retries: Extra attempts after the first failure

    Returns:
        Completion, or None if the request failed
    """
    payload: Dict[str, Any] = {
        "model": model or settings.XAI_MODEL,
        "messages": messages,
        "max_tokens": max_tokens if max_tokens is not None else settings.LLM_MAX_TOKENS,
        "temperature": temperature if temperature is not None else settings.LLM_TEMPERATURE,
    }
    timeout = timeout if timeout is not None else settings.LLM_TIMEOUT
    retries = max_retries if max_retries is not None else settings.LLM_MAX_RETRIES

    attempt = 0
    while True:
        attempt += 1
        try:
            resp = requests.post(
                settings.XAI_API_URL,
                headers=_headers(),
                json=payload,
                timeout=timeout,
            )
            if resp.status_code >= 500 and attempt <= retries:
                logger.warning(f"LLM request returned {resp.status_code}, retrying (attempt {attempt})")
                time.sleep(attempt)
                continue
        except requests.RequestException as e:
            if attempt <= retries:
                logger.warning(f"LLM request error, retrying (attempt {attempt}): {e}")
                time.sleep(attempt)
                continue
            logger.error(f"LLM request failed: {e}")
            return None

        if not resp.ok:
            logger.error(f"LLM request failed: {resp.status_code} {resp.reason}: {resp.text[:500]}")
            return None
        try:
            return _extract_completion(resp.json())
        except ValueError as e:
            logger.error(f"LLM response was not JSON: {e}")
            return None
