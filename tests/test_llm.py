from unittest.mock import MagicMock

import pytest
import requests

from paperscout.config.settings import LLMConfig, RetryConfig
from paperscout.core.exceptions import ConfigurationError, LLMError
from paperscout.llm import CerebrasClient, OpenRouterClient, create_llm_provider
from paperscout.llm.retry import is_retryable, with_retry


def _http_error(status):
    response = requests.Response()
    response.status_code = status
    return requests.HTTPError(f"{status}", response=response)


def _chat_response(content="hello"):
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = {
        "model": "llama-3.3-70b",
        "choices": [{"message": {"content": content}}],
        "usage": {"total_tokens": 12},
    }
    return response


class TestProviderFactory:
    def test_default_provider_is_cerebras(self):
        client = create_llm_provider(LLMConfig(api_key="k"))
        assert isinstance(client, CerebrasClient)
        assert client.default_model == "llama-3.3-70b"

    def test_openrouter(self):
        config = LLMConfig(provider="OpenRouter", api_key="k", retry=RetryConfig(max_attempts=5))
        client = create_llm_provider(config)
        assert isinstance(client, OpenRouterClient)
        assert client.max_retries == 5

    def test_unknown_provider(self):
        with pytest.raises(ConfigurationError, match="Unknown LLM provider"):
            create_llm_provider(LLMConfig(provider="nope", api_key="k"))

    def test_missing_api_key(self):
        with pytest.raises(ConfigurationError, match="No API key"):
            create_llm_provider(LLMConfig())


class TestHTTPClient:
    def test_cerebras_payload_and_response(self):
        client = CerebrasClient(api_key="secret")
        client._session = MagicMock()
        client._session.post.return_value = _chat_response('{"abstract": "x"}')

        result = client.complete("prompt", system="sys", max_tokens=50)

        assert result.content == '{"abstract": "x"}'
        assert result.tokens_used == 12
        _, kwargs = client._session.post.call_args
        assert client._session.post.call_args[0][0] == "https://api.cerebras.ai/v1/chat/completions"
        assert kwargs["headers"]["Authorization"] == "Bearer secret"
        assert kwargs["json"]["max_completion_tokens"] == 50
        assert "max_tokens" not in kwargs["json"]
        assert kwargs["json"]["messages"] == [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "prompt"},
        ]

    def test_openrouter_attribution_headers(self):
        client = OpenRouterClient(api_key="secret", app_name="paperscout")
        headers = client._build_headers()
        assert headers["X-Title"] == "paperscout"
        assert "HTTP-Referer" in headers

    def test_unexpected_shape_raises_llm_error(self):
        client = CerebrasClient(api_key="secret")
        client._session = MagicMock()
        response = _chat_response()
        response.json.return_value = {"choices": []}
        client._session.post.return_value = response

        with pytest.raises(LLMError):
            client.complete("prompt")

    def test_non_retryable_failure_raises_llm_error(self):
        client = CerebrasClient(api_key="secret")
        client._session = MagicMock()
        client._session.post.return_value.raise_for_status.side_effect = _http_error(401)

        with pytest.raises(LLMError):
            client.complete("prompt")
        assert client._session.post.call_count == 1


class TestRetry:
    def test_retries_transient_errors_with_backoff(self):
        delays = []
        calls = MagicMock(side_effect=[requests.ConnectionError("down"), _http_error(429), "ok"])

        @with_retry(max_attempts=3, backoff_factor=2.0, initial_delay=1.0, sleep=delays.append)
        def flaky():
            return calls()

        assert flaky() == "ok"
        assert delays == [1.0, 2.0]

    def test_gives_up_after_max_attempts(self):
        delays = []

        @with_retry(max_attempts=2, sleep=delays.append)
        def always_down():
            raise requests.Timeout("slow")

        with pytest.raises(requests.Timeout):
            always_down()
        assert len(delays) == 1

    def test_non_retryable_raised_immediately(self):
        delays = []

        @with_retry(sleep=delays.append)
        def bad_request():
            raise _http_error(400)

        with pytest.raises(requests.HTTPError):
            bad_request()
        assert delays == []

    @pytest.mark.parametrize("status,expected", [(429, True), (503, True), (400, False), (404, False)])
    def test_is_retryable_status(self, status, expected):
        assert is_retryable(_http_error(status)) is expected

    def test_invalid_attempts(self):
        with pytest.raises(ValueError):
            with_retry(max_attempts=0)
