from datetime import datetime
from enum import Enum
from typing import Annotated, Any
import uuid

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


# Checked, not rewritten: provider text is kept exactly as sent.
NonEmptyStr = Annotated[str, AfterValidator(_not_blank)]


def new_id() -> str:
    return str(uuid.uuid4())


class InventoryItem(BaseModel):
    """A single item in the current inventory."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    name: NonEmptyStr
    # Free text, e.g. "2 cups", "half a block".
    quantity: str = ""


class CuisineRegion(Enum):
    any = "Any"
    indian = "Indian"
    italian = "Italian"
    mexican = "Mexican"
    chinese = "Chinese"
    japanese = "Japanese"
    mediterranean = "Mediterranean"
    american = "American"
    thai = "Thai"
    middle_eastern = "Middle Eastern"
    korean = "Korean"
    french = "French"

    @property
    def display_name(self) -> str:
        return self.value


class DietaryPreferences(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    vegetarian: bool = False
    vegan: bool = False
    gluten_free: bool = Field(False, alias="glutenFree")
    dairy_free: bool = Field(False, alias="dairyFree")
    nut_free: bool = Field(False, alias="nutFree")
    cuisine_region: CuisineRegion = Field(CuisineRegion.any, alias="cuisineRegion")

    @property
    def active_labels(self) -> list[str]:
        """Canonical labels for every active flag, in a fixed order."""
        flags = (
            (self.vegetarian, "vegetarian"),
            (self.vegan, "vegan"),
            (self.gluten_free, "gluten-free"),
            (self.dairy_free, "dairy-free"),
            (self.nut_free, "nut-free"),
        )
        return [label for active, label in flags if active]


class LunchBoxIdea(BaseModel):
    """A lunch box recipe suggested by the AI.

    Field aliases follow the JSON the providers are asked to return, so the
    same model decodes provider payloads and persisted favorites.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id)
    name: NonEmptyStr
    ingredients: list[NonEmptyStr] = Field(min_length=1)
    preparation_steps: list[NonEmptyStr] = Field(
        alias="preparationSteps", min_length=1
    )
    saved_at: datetime | None = Field(None, alias="savedAt")
    youtube_video_id: str | None = Field(None, alias="youtubeVideoID")

    @field_validator("id", mode="before")
    @classmethod
    def _mint_missing_id(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return new_id()
        return value

    def __repr__(self) -> str:
        return f"<LunchBoxIdea(id={self.id}, name={self.name})>"

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
