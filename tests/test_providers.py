import pytest

from lunchbox.decoding import DecodeError
from lunchbox.providers import (
    AIProvider,
    ClaudeProvider,
    GeminiProvider,
    OpenAIProvider,
    create_provider,
)


@pytest.mark.parametrize(
    "name,expected",
    (
        ("gemini", GeminiProvider),
        ("Gemini", GeminiProvider),
        ("openai", OpenAIProvider),
        (AIProvider.claude, ClaudeProvider),
    ),
)
def test_create_provider(name, expected) -> None:
    assert isinstance(create_provider(name), expected)


def test_create_provider_unknown() -> None:
    with pytest.raises(ValueError):
        create_provider("mistral")


@pytest.mark.parametrize("provider", list(AIProvider))
def test_catalogue(provider: AIProvider) -> None:
    assert provider.base_url.startswith("https://")
    assert provider.default_model == provider.models[0]
    assert provider.credential_account == f"apiKey_{provider.value}"


def test_base_url_trailing_slash() -> None:
    request = GeminiProvider().build_request(
        "p", api_key="k", base_url="https://example.com/v1beta/", model="m"
    )
    assert request.url.path == "/v1beta/models/m:generateContent"


@pytest.mark.parametrize(
    "provider,data",
    (
        (GeminiProvider(), {"candidates": [{"content": {"parts": [{"text": ""}]}}]}),
        (GeminiProvider(), {"candidates": [{"content": {"parts": []}}]}),
        (OpenAIProvider(), {"choices": [{"message": {"content": None}}]}),
        (ClaudeProvider(), {"content": [{"type": "tool_use", "id": "x"}]}),
        (ClaudeProvider(), {"content": "text"}),
        (GeminiProvider(), ["not", "an", "envelope"]),
    ),
)
def test_envelope_text_rejects(provider, data) -> None:
    with pytest.raises(DecodeError):
        provider.envelope_text(data)


def test_claude_skips_non_text_blocks() -> None:
    data = {"content": [{"type": "thinking"}, {"type": "text", "text": "[]"}]}
    assert ClaudeProvider().envelope_text(data) == "[]"
