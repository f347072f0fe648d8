"""
補完APIクライアントのテスト（HTTPはモック）
"""

from unittest.mock import MagicMock, patch

import ollama
import pytest
import requests

from src.devjournal.completion_client import (
    GatewayCompletionClient,
    OllamaCompletionClient,
    create_completion_client,
)
from src.devjournal.config import CompletionConfig, Config
from src.devjournal.exceptions import MalformedModelOutputError, UpstreamError


def make_response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text
    response.json.return_value = payload
    return response


@pytest.fixture
def client():
    return GatewayCompletionClient(
        api_url="https://gateway.test/v1/chat/completions",
        api_key="secret-key",
        model="google/gemini-2.5-flash",
        timeout=12.5,
    )


def test_gateway_sends_single_turn_request(client):
    payload = {"choices": [{"message": {"content": "Hello"}}]}
    with patch("src.devjournal.completion_client.requests.post", return_value=make_response(payload=payload)) as post:
        assert client.complete("Summarize") == "Hello"

    args, kwargs = post.call_args
    assert args[0] == "https://gateway.test/v1/chat/completions"
    assert kwargs["json"] == {
        "model": "google/gemini-2.5-flash",
        "messages": [{"role": "user", "content": "Summarize"}],
    }
    assert kwargs["headers"]["Authorization"] == "Bearer secret-key"
    assert kwargs["timeout"] == 12.5


def test_gateway_non_success_is_upstream_error(client):
    response = make_response(status_code=402, text="Payment required")
    with patch("src.devjournal.completion_client.requests.post", return_value=response):
        with pytest.raises(UpstreamError) as exc_info:
            client.complete("Summarize")

    assert exc_info.value.status_code == 402
    assert exc_info.value.body == "Payment required"
    assert "402" in str(exc_info.value)


def test_gateway_timeout_is_upstream_error(client):
    with patch(
        "src.devjournal.completion_client.requests.post",
        side_effect=requests.exceptions.Timeout("read timed out"),
    ):
        with pytest.raises(UpstreamError) as exc_info:
            client.complete("Summarize")

    assert exc_info.value.status_code is None


@pytest.mark.parametrize(
    "payload",
    [{}, {"choices": []}, {"choices": [{"message": {"content": ""}}]}],
)
def test_gateway_missing_content_is_malformed(client, payload):
    with patch("src.devjournal.completion_client.requests.post", return_value=make_response(payload=payload)):
        with pytest.raises(MalformedModelOutputError):
            client.complete("Summarize")


def test_ollama_client_returns_message_content():
    with patch("src.devjournal.completion_client.ollama.Client") as client_cls:
        client_cls.return_value.chat.return_value = {"message": {"content": "[]"}}
        client = OllamaCompletionClient(host="http://ollama.test", model="llama3.1:8b", timeout=5)

        assert client.complete("Parse") == "[]"

    client_cls.assert_called_once_with(host="http://ollama.test", timeout=5)
    kwargs = client_cls.return_value.chat.call_args.kwargs
    assert kwargs["messages"] == [{"role": "user", "content": "Parse"}]
    assert kwargs["stream"] is False


def test_ollama_response_error_is_upstream_error():
    with patch("src.devjournal.completion_client.ollama.Client") as client_cls:
        client_cls.return_value.chat.side_effect = ollama.ResponseError("model not found", 404)
        client = OllamaCompletionClient()

        with pytest.raises(UpstreamError) as exc_info:
            client.complete("Parse")

    assert exc_info.value.status_code == 404


def test_factory_selects_provider():
    gateway = create_completion_client(Config(completion=CompletionConfig(provider="gateway", api_key="k")))
    assert isinstance(gateway, GatewayCompletionClient)
    assert gateway.api_key == "k"

    with patch("src.devjournal.completion_client.ollama.Client"):
        local = create_completion_client(Config(completion=CompletionConfig(provider="ollama")))
    assert isinstance(local, OllamaCompletionClient)

    with pytest.raises(ValueError):
        create_completion_client(Config(completion=CompletionConfig(provider="unknown")))
