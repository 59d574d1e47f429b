from typing import Iterable

from lunchbox.models import CuisineRegion, DietaryPreferences, InventoryItem


SUGGEST_IDEAS_PROMPT = """
You are a helpful meal-prep assistant. Given a list of available food items, \
suggest creative and practical lunch box ideas. \
Return a JSON object with a single key "ideas" containing an array of objects. \
Each object must have these fields:
- "id": a UUID string
- "name": a non-empty string (the recipe name)
- "ingredients": a non-empty array of strings (ingredients from the provided list)
- "preparationSteps": a non-empty array of strings (step-by-step instructions)
Return at least 3 ideas.
""".strip()


class SuggestIdeasPrompt:
    def __init__(
        self,
        content: str | None = None,
    ) -> None:
        self.content = SUGGEST_IDEAS_PROMPT if content is None else content

    def __str__(self) -> str:
        return self.content


def build_prompt(
    inventory: Iterable[InventoryItem],
    preferences: DietaryPreferences,
) -> str:
    """Render the inventory and preferences into the user turn of the request.

    The output is deterministic. For example::

        Available ingredients: apple, bread, cheese
        Dietary preferences: vegetarian, gluten-free
        Cuisine style: Italian

    The ingredients line is always present, even for an empty inventory.
    The other two lines only appear when there is something to say.
    """
    names = ", ".join(item.name for item in inventory)
    lines = [f"Available ingredients: {names}"]

    labels = preferences.active_labels
    if labels:
        lines.append(f"Dietary preferences: {', '.join(labels)}")

    if preferences.cuisine_region is not CuisineRegion.any:
        lines.append(f"Cuisine style: {preferences.cuisine_region.display_name}")

    return "\n".join(lines)
