"""Minimal client for OpenAI-compatible chat-completions endpoints."""

from __future__ import annotations

import json
import time
from typing import Any, Dict, List, Tuple

import requests

from .config import OpenAISettings
from .utils import setup_logging

logger = setup_logging()


class OpenAIClientError(Exception):
    pass


def _build_request(
    settings: OpenAISettings,
    messages: List[Dict[str, str]],
    temperature: float,
    max_tokens: int,
) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
    if not settings.api_key or not settings.base_url or not settings.model_name:
        raise OpenAIClientError(
            "OpenAI settings are incomplete. "
            "Please set OPENAI_API_KEY (and optionally OPENAI_BASE_URL, OPENAI_MODEL)."
        )

    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {settings.api_key}",
    }
    body = {
        "model": settings.model_name,
        "messages": messages,
        "temperature": temperature,
        "max_tokens": max_tokens,
    }
    return f"{settings.base_url}/chat/completions", headers, body


def _parse_response(resp: requests.Response) -> Dict[str, Any]:
    if resp.status_code >= 400:
        raise OpenAIClientError(f"OpenAI API error {resp.status_code}: {resp.text}")

    data = resp.json()
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise OpenAIClientError(f"Unexpected OpenAI response: {json.dumps(data)}") from exc

    if not content:
        raise OpenAIClientError("OpenAI response contained no content")
    return {"content": content.strip(), "usage": data.get("usage", {})}


def chat_completion(
    settings: OpenAISettings,
    messages: List[Dict[str, str]],
    temperature: float = 0.7,
    max_tokens: int = 500,
    max_retries: int = 3,
    retry_backoff: float = 1.5,
) -> Dict[str, Any]:
    """Call ``POST {base_url}/chat/completions`` with Bearer auth and retry logic.

    Returns ``{"content": str, "usage": dict}``. Incomplete settings fail
    immediately; HTTP errors, malformed bodies and network failures are
    retried with exponential backoff before ``OpenAIClientError`` is raised.
    """
    url, headers, body = _build_request(settings, messages, temperature, max_tokens)

    last_err: Exception | None = None
    for attempt in range(1, max_retries + 1):
        try:
            resp = requests.post(url, headers=headers, json=body, timeout=settings.timeout_seconds)
            return _parse_response(resp)
        except (requests.RequestException, ValueError, OpenAIClientError) as exc:
            last_err = exc
            logger.warning("chat_completion attempt %s/%s failed: %s", attempt, max_retries, exc)
            if attempt < max_retries:
                time.sleep(retry_backoff**attempt)

    raise OpenAIClientError(f"OpenAI chat_completion failed after {max_retries} attempts: {last_err}")
