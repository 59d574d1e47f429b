import markdown2  # pyright: ignore[reportMissingTypeStubs]

from lunchbox.models import LunchBoxIdea
from lunchbox.youtube import watch_url


def format_idea(idea: LunchBoxIdea) -> str:
    """Plain text for sharing an idea.

    ::

        <name>

        Ingredients:
        - <ingredient>

        Preparation:
        1. <step>
    """
    lines = [idea.name, "", "Ingredients:"]
    lines.extend(f"- {ingredient}" for ingredient in idea.ingredients)
    lines.extend(["", "Preparation:"])
    lines.extend(f"{n}. {step}" for n, step in enumerate(idea.preparation_steps, 1))
    return "\n".join(lines)


def to_markdown(idea: LunchBoxIdea) -> str:
    lines = [f"### {idea.name}", "", "#### 📝 Ingredients", ""]
    lines.extend(f"- {ingredient}" for ingredient in idea.ingredients)
    lines.extend(["", "#### ✅ Preparation", ""])
    lines.extend(f"{n}. {step}" for n, step in enumerate(idea.preparation_steps, 1))
    if idea.youtube_video_id:
        lines.extend(["", f"🎬 [Watch on YouTube]({watch_url(idea.youtube_video_id)})"])
    return "\n".join(lines)


def to_html(idea: LunchBoxIdea) -> str:
    return markdown2.markdown(  # pyright: ignore[reportUnknownVariableType, reportUnknownMemberType]
        to_markdown(idea), extras=["fences", "tables"]
    )
