"""Ask for lunch box ideas from the command line.

    python -m lunchbox eggs spinach tortilla --vegetarian --cuisine Mexican
"""

import argparse
import asyncio
import logging

from rich import print
from rich.logging import RichHandler

from lunchbox.ai_client import AIClient, http_client_factory
from lunchbox.config import Config
from lunchbox.credentials import MemoryCredentialStore
from lunchbox.models import CuisineRegion, DietaryPreferences, InventoryItem
from lunchbox.share import format_idea
from lunchbox.stores import InventoryStore, PreferencesStore
from lunchbox.suggestions import SuggestionOrchestrator
from lunchbox.youtube import YouTubeClient, watch_url


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="lunchbox", description=__doc__)
    parser.add_argument("items", nargs="+", help="food items you have")
    parser.add_argument("--vegetarian", action="store_true")
    parser.add_argument("--vegan", action="store_true")
    parser.add_argument("--gluten-free", action="store_true")
    parser.add_argument("--dairy-free", action="store_true")
    parser.add_argument("--nut-free", action="store_true")
    parser.add_argument(
        "--cuisine",
        choices=[c.value for c in CuisineRegion],
        default=CuisineRegion.any.value,
    )
    parser.add_argument("--no-videos", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


async def main(args: argparse.Namespace, config: Config | None = None) -> int:
    config = Config() if config is None else config
    credentials = MemoryCredentialStore.from_env()

    client = AIClient(
        credentials=credentials,
        config=config.gateway_config(),
        http_client=http_client_factory(config.request_timeout),
    )
    video_client = (
        None
        if args.no_videos
        else YouTubeClient(credentials=credentials, base_url=config.video_base_url)
    )

    preferences = DietaryPreferences(
        vegetarian=args.vegetarian,
        vegan=args.vegan,
        gluten_free=args.gluten_free,
        dairy_free=args.dairy_free,
        nut_free=args.nut_free,
        cuisine_region=CuisineRegion(args.cuisine),
    )
    orchestrator = SuggestionOrchestrator(
        client=client,
        inventory_store=InventoryStore([InventoryItem(name=i) for i in args.items]),
        preferences_store=PreferencesStore(preferences=preferences),
        video_client=video_client,
        video_timeout=config.video_timeout,
    )

    try:
        await orchestrator.fetch_suggestions()
    finally:
        await client.close()
        if video_client is not None:
            await video_client.close()

    if orchestrator.error_state is not None:
        print(f"[red]{orchestrator.error_state.user_message}[/red]")
        return 1

    for idea in orchestrator.ideas:
        print(f"[bold green]{format_idea(idea)}[/bold green]")
        if idea.youtube_video_id:
            print(watch_url(idea.youtube_video_id))
        print()
    if orchestrator.status_message:
        print(f"[yellow]{orchestrator.status_message}[/yellow]")
    return 0


def run() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler()],
    )
    raise SystemExit(asyncio.run(main(args)))


if __name__ == "__main__":
    run()
