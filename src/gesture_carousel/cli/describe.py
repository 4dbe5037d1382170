from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import typer

from ..config import Config
from ..description import DescriptionService
from . import options
from .common import app


@app.command(name="items")
def items_cmd(config_path: Path | None = options.config) -> None:
    """List the items of the carousel."""
    config = Config.load(config_path)
    for index, item in enumerate(config.carousel.items):
        print(f"[{index}] #{item.id} {item.title} - {item.theme} ({item.media_kind.value}) {item.url}")


@app.command(name="describe")
def describe_cmd(
    index: int = typer.Option(0, "--index", "-i", help="Position of the item to describe"),
    title: str | None = typer.Option(None, "--title", help="Describe this title instead of a configured item"),
    theme: str | None = typer.Option(None, "--theme", help="Theme to use with --title"),
    config_path: Path | None = options.config,
) -> None:
    """Write a short description of a carousel item."""
    config = Config.load(config_path)

    if title is None:
        items = config.carousel.items
        if not 0 <= index < len(items):
            print(f"No item at index {index}, there are {len(items)} items.", file=sys.stderr)
            raise typer.Exit(1)
        title, theme = items[index].title, items[index].theme

    service = DescriptionService(config.description.api_key, config.description.model)
    print(asyncio.run(service.generate_description(theme or "", title)))
