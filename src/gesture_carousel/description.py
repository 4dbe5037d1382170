"""Short poetic descriptions of carousel items, written by Gemini."""

from __future__ import annotations

import asyncio
import logging
import os
import threading
from collections.abc import Callable

import google.generativeai as genai  # type: ignore[import-untyped]

from .models.items import PhotoItem

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

MISSING_API_KEY_TEXT = "API Key not found. Please check your configuration."
EMPTY_RESPONSE_TEXT = "No description generated."
FAILURE_TEXT = "Could not load description at this time."

PROMPT_TEMPLATE = (
    'Write a short, immersive, and poetic 2-sentence description for a photograph titled "{title}" '
    'with the theme "{theme}". Keep it abstract and evocative.'
)


def response_text(response: genai.types.GenerateContentResponse) -> str:
    """Text of the first candidate of a Gemini response, empty when it was blocked or has no text part.

    `response.text` raises `ValueError` in those cases, so the parts are read directly.
    """
    if not response.candidates:
        return ""
    content = response.candidates[0].content
    parts = content.parts if content is not None else []
    return "".join(getattr(part, "text", "") or "" for part in parts)


class DescriptionService:
    def __init__(self, api_key: str | None = None, model: str = DEFAULT_MODEL) -> None:
        self.api_key = api_key or os.getenv("GOOGLE_API_KEY") or None
        self.model_name = model
        self._model: genai.GenerativeModel | None = None

    @property
    def model(self) -> genai.GenerativeModel:
        if self._model is None:
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    async def generate_description(self, theme: str, title: str) -> str:
        """Describe an item from its theme and title. Failures are returned as a readable text, never raised."""
        if not self.api_key:
            return MISSING_API_KEY_TEXT

        try:
            response = await self.model.generate_content_async(PROMPT_TEMPLATE.format(title=title, theme=theme))
        except Exception:
            logger.exception("Gemini API error while describing %r", title)
            return FAILURE_TEXT

        text = response_text(response).strip()
        if not text:
            logger.warning("Gemini returned no text for %r", title)
            return EMPTY_RESPONSE_TEXT
        return text

    async def describe_item(self, item: PhotoItem) -> str:
        return await self.generate_description(item.theme, item.title)


def describe_in_background(
    service: DescriptionService,
    item: PhotoItem,
    callback: Callable[[PhotoItem, str], None],
) -> threading.Thread:
    """Describe `item` in a separate thread, then call `callback(item, text)` from that thread."""

    def worker() -> None:
        callback(item, asyncio.run(service.describe_item(item)))

    thread = threading.Thread(target=worker, name=f"describe-{item.id}", daemon=True)
    thread.start()
    return thread
