import logging
from typing import Protocol

import httpx
from pydantic import BaseModel, ConfigDict

from lunchbox.credentials import CredentialStore
from lunchbox.decoding import DecodeError, decode_ideas
from lunchbox.errors import (
    CredentialError,
    CredentialNotFound,
    HttpError,
    InsufficientSuggestions,
    InvalidResponse,
    MissingCredential,
    NetworkUnavailable,
)
from lunchbox.models import LunchBoxIdea
from lunchbox.providers import AIProvider, Provider, create_provider


logger = logging.getLogger(__name__)

MIN_SUGGESTIONS = 3
TIMEOUT = 60 * 2


class AIGatewayConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str
    model: str
    provider: AIProvider = AIProvider.gemini

    @classmethod
    def for_provider(cls, provider: AIProvider) -> "AIGatewayConfig":
        return cls(
            base_url=provider.base_url,
            model=provider.default_model.id,
            provider=provider,
        )


class AIClientProtocol(Protocol):
    async def fetch_suggestions(self, prompt: str) -> list[LunchBoxIdea]:
        ...


def http_client_factory(timeout: float = TIMEOUT) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=timeout)


def redact(url: httpx.URL) -> str:
    if "key" not in url.params:
        return str(url)
    return str(url.copy_set_param("key", "REDACTED"))


class AIClient:
    """Fetch lunch box ideas from the configured AI provider.

    The provider's API key is read from the credential store on every call.
    Failures are raised as `lunchbox.errors.AIClientError` subclasses; the
    client never retries.
    """

    def __init__(
        self,
        *,
        credentials: CredentialStore,
        config: AIGatewayConfig,
        provider: Provider | None = None,
        http_client: httpx.AsyncClient | None = None,
        account: str | None = None,
    ) -> None:
        self.credentials = credentials
        self.config = config
        self.provider = create_provider(config.provider) if provider is None else provider
        self.http_client = http_client_factory() if http_client is None else http_client
        self.account = config.provider.credential_account if account is None else account

    async def fetch_suggestions(self, prompt: str) -> list[LunchBoxIdea]:
        try:
            api_key = self.credentials.load(self.account)
        except CredentialNotFound:
            logger.error("No API key stored for %s", self.account)
            raise MissingCredential(self.account) from None
        except CredentialError as exc:
            logger.error("Could not read the API key for %s: %s", self.account, exc)
            raise MissingCredential(self.account) from exc
        logger.info("API key loaded for %s (length: %d)", self.account, len(api_key))

        request = self.build_request(prompt, api_key)
        response = await self._send(request)

        body = response.text
        if 400 <= response.status_code <= 599:
            logger.error("HTTP %d from %s", response.status_code, redact(request.url))
            logger.error("Response body: %s", body)
            raise HttpError(response.status_code, body)

        logger.info("HTTP %d from %s", response.status_code, redact(request.url))
        logger.debug("Raw response: %s", body)

        try:
            ideas = decode_ideas(response.content, self.provider.envelope_text)
        except DecodeError as exc:
            logger.error("Could not decode ideas: %s", exc)
            raise InvalidResponse(
                f"Unable to parse {self.config.provider.value} response into ideas: {exc}"
            ) from exc

        if len(ideas) < MIN_SUGGESTIONS:
            raise InsufficientSuggestions(len(ideas))

        return ideas

    def build_request(self, prompt: str, api_key: str) -> httpx.Request:
        return self.provider.build_request(
            prompt,
            api_key=api_key,
            base_url=self.config.base_url,
            model=self.config.model,
        )

    async def _send(self, request: httpx.Request) -> httpx.Response:
        logger.info("Requesting %s", redact(request.url))
        try:
            return await self.http_client.send(request)
        except httpx.TransportError as exc:
            logger.error("Network error: %r", exc)
            raise NetworkUnavailable() from exc
        except Exception as exc:
            logger.exception("Unexpected network error")
            raise NetworkUnavailable() from exc

    async def close(self) -> None:
        await self.http_client.aclose()
