import pytest

from lunchbox.credentials import YOUTUBE_ACCOUNT, MemoryCredentialStore
from lunchbox.models import LunchBoxIdea


IDEAS = [
    {
        "id": "6f1c1c7e-0d5b-4a3e-9a53-2b1f0f6f2a01",
        "name": "Spinach and egg wrap",
        "ingredients": ["eggs", "spinach", "tortilla"],
        "preparationSteps": ["Scramble the eggs.", "Wilt the spinach.", "Wrap it up."],
    },
    {
        "id": "6f1c1c7e-0d5b-4a3e-9a53-2b1f0f6f2a02",
        "name": "Tortilla pinwheels",
        "ingredients": ["tortilla", "spinach"],
        "preparationSteps": ["Spread the filling.", "Roll and slice."],
    },
    {
        "id": "6f1c1c7e-0d5b-4a3e-9a53-2b1f0f6f2a03",
        "name": "Mini frittatas",
        "ingredients": ["eggs", "spinach"],
        "preparationSteps": ["Whisk.", "Bake in a muffin tin for 20 minutes."],
    },
]


@pytest.fixture
def ideas_payload() -> list[dict]:
    return [dict(idea) for idea in IDEAS]


@pytest.fixture
def ideas() -> list[LunchBoxIdea]:
    return [LunchBoxIdea.model_validate(idea) for idea in IDEAS]


@pytest.fixture
def credentials() -> MemoryCredentialStore:
    return MemoryCredentialStore(
        {
            "apiKey_Gemini": "gemini-secret",
            "apiKey_OpenAI": "openai-secret",
            "apiKey_Claude": "claude-secret",
            YOUTUBE_ACCOUNT: "youtube-secret",
        }
    )
