from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lunchbox.ai_client import TIMEOUT, AIGatewayConfig
from lunchbox.providers import AIProvider
from lunchbox.suggestions import VIDEO_TIMEOUT
from lunchbox.youtube import BASE_URL as VIDEO_BASE_URL


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LUNCHBOX_")

    env: Env = Env.local
    ai_provider: AIProvider = AIProvider.gemini
    ai_base_url: str | None = None
    ai_model: str | None = None
    request_timeout: float = TIMEOUT
    video_base_url: str = VIDEO_BASE_URL
    video_timeout: float = VIDEO_TIMEOUT
    favorites_path: Path = Path("favorites.json")
    preferences_path: Path | None = None

    @field_validator("ai_provider", mode="before")
    @classmethod
    def _provider_by_name(cls, value: Any) -> Any:
        # Accept "gemini" as well as "Gemini".
        if isinstance(value, str) and value.lower() in AIProvider.__members__:
            return AIProvider[value.lower()]
        return value

    def gateway_config(self) -> AIGatewayConfig:
        return AIGatewayConfig(
            base_url=self.ai_base_url or self.ai_provider.base_url,
            model=self.ai_model or self.ai_provider.default_model.id,
            provider=self.ai_provider,
        )
