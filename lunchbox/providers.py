"""Request shapes for the supported AI providers.

Each provider knows how to turn a prompt into an HTTP request and where its
response envelope keeps the generated text. Everything else (transport,
status handling, decoding ideas) is shared by `lunchbox.ai_client`.
"""

from enum import Enum
from typing import Any, NamedTuple, Protocol

import httpx

from lunchbox.decoding import DecodeError
from lunchbox.prompts import SuggestIdeasPrompt


class AIModel(NamedTuple):
    id: str
    name: str
    note: str


class AIProvider(Enum):
    gemini = "Gemini"
    openai = "OpenAI"
    claude = "Claude"

    @property
    def base_url(self) -> str:
        match self:
            case AIProvider.gemini:
                return "https://generativelanguage.googleapis.com/v1beta"
            case AIProvider.openai:
                return "https://api.openai.com/v1"
            case AIProvider.claude:
                return "https://api.anthropic.com/v1"

    @property
    def models(self) -> list[AIModel]:
        match self:
            case AIProvider.gemini:
                return [
                    AIModel("gemini-2.0-flash", "Gemini 2.0 Flash", "Fast"),
                    AIModel("gemini-2.0-flash-lite", "Gemini 2.0 Flash Lite", "Fastest"),
                    AIModel("gemini-1.5-flash", "Gemini 1.5 Flash", "Free tier"),
                    AIModel("gemini-1.5-pro", "Gemini 1.5 Pro", "Smarter"),
                    AIModel("gemini-2.5-pro-preview", "Gemini 2.5 Pro Preview", "Best"),
                ]
            case AIProvider.openai:
                return [
                    AIModel("gpt-4o-mini", "GPT-4o Mini", "Fast · Affordable"),
                    AIModel("gpt-4o", "GPT-4o", "Smarter"),
                    AIModel("gpt-4-turbo", "GPT-4 Turbo", "Powerful"),
                    AIModel("gpt-3.5-turbo", "GPT-3.5 Turbo", "Legacy · Cheapest"),
                ]
            case AIProvider.claude:
                return [
                    AIModel("claude-3-5-haiku-20241022", "Claude 3.5 Haiku", "Fast"),
                    AIModel("claude-3-5-sonnet-20241022", "Claude 3.5 Sonnet", "Balanced"),
                    AIModel("claude-3-opus-20240229", "Claude 3 Opus", "Most capable"),
                ]

    @property
    def default_model(self) -> AIModel:
        return self.models[0]

    @property
    def credential_account(self) -> str:
        return f"apiKey_{self.value}"


class Provider(Protocol):
    kind: AIProvider

    def build_request(
        self, prompt: str, *, api_key: str, base_url: str, model: str
    ) -> httpx.Request:
        ...

    def envelope_text(self, data: Any) -> str:
        """Return the generated text inside a decoded response envelope.

        Raises `DecodeError` when `data` is not this provider's envelope.
        """
        ...


class ChatMsg:
    def __init__(self, *, role: str, content: str) -> None:
        self.role = role
        self.content = content

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


def _endpoint(base_url: str, path: str) -> str:
    return f"{base_url.rstrip('/')}/{path}"


def _dig(data: Any, *path: str | int) -> Any:
    for step in path:
        try:
            data = data[step]
        except (KeyError, IndexError, TypeError):
            raise DecodeError(f"Missing {step!r} in response envelope") from None
    return data


def _text(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise DecodeError("Empty content in response envelope")
    return value


class GeminiProvider:
    """`models/{model}:generateContent`, key passed as a query parameter."""

    kind = AIProvider.gemini

    def __init__(self, system_prompt: SuggestIdeasPrompt | None = None) -> None:
        self.system_prompt = SuggestIdeasPrompt() if system_prompt is None else system_prompt

    def payload(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "system_instruction": {"parts": [{"text": str(self.system_prompt)}]},
            "generation_config": {"response_mime_type": "application/json"},
        }

    def build_request(
        self, prompt: str, *, api_key: str, base_url: str, model: str
    ) -> httpx.Request:
        return httpx.Request(
            "POST",
            _endpoint(base_url, f"models/{model}:generateContent"),
            params={"key": api_key},
            headers={"Content-Type": "application/json"},
            json=self.payload(prompt),
        )

    def envelope_text(self, data: Any) -> str:
        return _text(_dig(data, "candidates", 0, "content", "parts", 0, "text"))


class OpenAIProvider:
    """Chat completions in JSON mode, key passed as a bearer token."""

    kind = AIProvider.openai

    def __init__(self, system_prompt: SuggestIdeasPrompt | None = None) -> None:
        self.system_prompt = SuggestIdeasPrompt() if system_prompt is None else system_prompt

    def payload(self, prompt: str, model: str) -> dict[str, Any]:
        messages = [
            ChatMsg(role="system", content=str(self.system_prompt)),
            ChatMsg(role="user", content=prompt),
        ]
        return {
            "model": model,
            "messages": [m.to_dict() for m in messages],
            "response_format": {"type": "json_object"},
        }

    def build_request(
        self, prompt: str, *, api_key: str, base_url: str, model: str
    ) -> httpx.Request:
        return httpx.Request(
            "POST",
            _endpoint(base_url, "chat/completions"),
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            json=self.payload(prompt, model),
        )

    def envelope_text(self, data: Any) -> str:
        return _text(_dig(data, "choices", 0, "message", "content"))


class ClaudeProvider:
    """Anthropic messages API, key passed in the `x-api-key` header."""

    kind = AIProvider.claude
    api_version = "2023-06-01"

    def __init__(
        self,
        system_prompt: SuggestIdeasPrompt | None = None,
        max_tokens: int = 4096,
    ) -> None:
        self.system_prompt = SuggestIdeasPrompt() if system_prompt is None else system_prompt
        self.max_tokens = max_tokens

    def payload(self, prompt: str, model: str) -> dict[str, Any]:
        return {
            "model": model,
            "max_tokens": self.max_tokens,
            "system": str(self.system_prompt),
            "messages": [ChatMsg(role="user", content=prompt).to_dict()],
        }

    def build_request(
        self, prompt: str, *, api_key: str, base_url: str, model: str
    ) -> httpx.Request:
        return httpx.Request(
            "POST",
            _endpoint(base_url, "messages"),
            headers={
                "x-api-key": api_key,
                "anthropic-version": self.api_version,
                "Content-Type": "application/json",
            },
            json=self.payload(prompt, model),
        )

    def envelope_text(self, data: Any) -> str:
        blocks = _dig(data, "content")
        if not isinstance(blocks, list):
            raise DecodeError("Expected a list of content blocks")
        for block in blocks:
            if isinstance(block, dict) and block.get("type") == "text":
                return _text(block.get("text"))
        raise DecodeError("No text block in response envelope")


def create_provider(kind: AIProvider | str) -> Provider:
    """Create the provider variant for a configured provider name."""
    if isinstance(kind, str):
        try:
            kind = AIProvider[kind.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown AI provider: {kind!r} (choose gemini, openai or claude)"
            ) from None

    match kind:
        case AIProvider.gemini:
            return GeminiProvider()
        case AIProvider.openai:
            return OpenAIProvider()
        case AIProvider.claude:
            return ClaudeProvider()
