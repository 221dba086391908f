"""
Unit Tests for the chat-completions client.

requests.post and time.sleep are patched; no network access.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from vitality.config import OpenAISettings
from vitality.openai_client import OpenAIClientError, chat_completion


MESSAGES = [{"role": "user", "content": "How is my sleep?"}]


@pytest.fixture
def settings():
    return OpenAISettings(api_key="sk-test", base_url="https://example.test/v1", timeout_seconds=5)


def _response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = payload
    return response


class TestChatCompletion:

    def test_success(self, settings):
        payload = {
            "choices": [{"message": {"content": "  Sleep looks fine.  "}}],
            "usage": {"total_tokens": 12},
        }
        with patch("vitality.openai_client.requests.post", return_value=_response(payload=payload)) as post:
            result = chat_completion(settings, MESSAGES, temperature=0.3, max_tokens=100)

        assert result == {"content": "Sleep looks fine.", "usage": {"total_tokens": 12}}
        args, kwargs = post.call_args
        assert args[0] == "https://example.test/v1/chat/completions"
        assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
        assert kwargs["json"]["model"] == "gpt-4o-mini"
        assert kwargs["json"]["max_tokens"] == 100
        assert kwargs["timeout"] == 5

    def test_http_error_retries_then_raises(self, settings):
        with patch(
            "vitality.openai_client.requests.post",
            return_value=_response(status_code=500, text="server error"),
        ) as post, patch("vitality.openai_client.time.sleep") as sleep:
            with pytest.raises(OpenAIClientError, match="after 3 attempts"):
                chat_completion(settings, MESSAGES)

        assert post.call_count == 3
        assert sleep.call_count == 2

    def test_recovers_after_transient_failure(self, settings):
        payload = {"choices": [{"message": {"content": "ok"}}]}
        responses = [requests.ConnectionError("reset"), _response(payload=payload)]
        with patch("vitality.openai_client.requests.post", side_effect=responses), \
                patch("vitality.openai_client.time.sleep"):
            result = chat_completion(settings, MESSAGES)

        assert result == {"content": "ok", "usage": {}}

    def test_malformed_response(self, settings):
        with patch(
            "vitality.openai_client.requests.post",
            return_value=_response(payload={"choices": []}),
        ), patch("vitality.openai_client.time.sleep"):
            with pytest.raises(OpenAIClientError, match="Unexpected OpenAI response"):
                chat_completion(settings, MESSAGES, max_retries=1)

    def test_empty_content(self, settings):
        payload = {"choices": [{"message": {"content": ""}}]}
        with patch("vitality.openai_client.requests.post", return_value=_response(payload=payload)):
            with pytest.raises(OpenAIClientError, match="no content"):
                chat_completion(settings, MESSAGES, max_retries=1)

    def test_incomplete_settings(self):
        with patch("vitality.openai_client.requests.post") as post:
            with pytest.raises(OpenAIClientError, match="incomplete"):
                chat_completion(OpenAISettings(api_key=None), MESSAGES)
        post.assert_not_called()
