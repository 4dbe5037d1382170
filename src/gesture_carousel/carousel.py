from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeAlias

from .gestures import ADVANCING_GESTURES, RETREATING_GESTURES, GestureEvent
from .models.items import EDITABLE_FIELDS, PhotoItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CarouselState:
    items: tuple[PhotoItem, ...]
    selected_index: int
    rotation_angle: float  # Degrees, never wrapped: keeps growing when turning in the same direction

    @property
    def step_angle(self) -> float:
        """Angle (degrees) between two consecutive items on the ring."""
        return 360 / len(self.items)

    @property
    def selected_item(self) -> PhotoItem:
        return self.items[self.selected_index]

    def item_angle(self, index: int) -> float:
        """Fixed angle (degrees) of the item at `index` on the ring, before the carousel rotation."""
        return self.step_angle * index

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.model_dump(mode="json") for item in self.items],
            "selected_index": self.selected_index,
            "rotation_angle": self.rotation_angle,
        }


ChangeListener: TypeAlias = Callable[[CarouselState], None]


class CarouselController:
    """Owner of the carousel items, the selected one, and the rotation of the ring.

    The selected index and the rotation angle are both derived from a single count of net steps (advances minus
    retreats), so they can never drift apart.
    """

    def __init__(
        self,
        items: Iterable[PhotoItem],
        on_change: ChangeListener | None = None,
        selected_index: int = 0,
        rotation_angle: float = 0.0,
    ) -> None:
        items = tuple(items)
        if not items:
            raise ValueError("A carousel needs at least one item.")
        ids = [item.id for item in items]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Carousel item ids must be unique, got {ids}")
        if not 0 <= selected_index < len(items):
            raise ValueError(f"Selected index {selected_index} out of range for {len(items)} items.")

        self.on_change = on_change
        self._items = items
        self._initial_index = selected_index
        self._initial_angle = rotation_angle
        self._net_steps = 0
        self._state = self._build_state()

    @property
    def state(self) -> CarouselState:
        return self._state

    @property
    def length(self) -> int:
        return len(self._items)

    @property
    def step_angle(self) -> float:
        return 360 / self.length

    def _build_state(self) -> CarouselState:
        return CarouselState(
            items=self._items,
            selected_index=(self._initial_index + self._net_steps) % self.length,
            rotation_angle=self._initial_angle - self._net_steps * self.step_angle,
        )

    def _commit(self) -> CarouselState:
        self._state = self._build_state()
        if self.on_change is not None:
            self.on_change(self._state)
        return self._state

    def _step(self, steps: int) -> CarouselState:
        self._net_steps += steps
        state = self._commit()
        logger.debug("Carousel now at index %d, angle %.1f", state.selected_index, state.rotation_angle)
        return state

    def advance(self) -> CarouselState:
        """Select the next item, turning the ring by one step."""
        return self._step(1)

    def retreat(self) -> CarouselState:
        """Select the previous item, turning the ring back by one step."""
        return self._step(-1)

    def replace_selected(self, **patch: Any) -> CarouselState:
        """Update some fields of the selected item. The selection and rotation are left untouched."""
        forbidden = set(patch) - EDITABLE_FIELDS
        if forbidden:
            raise ValueError(f"Cannot update fields {sorted(forbidden)}, editable fields are {sorted(EDITABLE_FIELDS)}")

        index = self._state.selected_index
        current = self._items[index]
        updated = PhotoItem.model_validate({**current.model_dump(), **patch})

        self._items = (*self._items[:index], updated, *self._items[index + 1 :])
        logger.debug("Item %d updated: %s", current.id, sorted(patch))
        return self._commit()

    def dispatch(self, event: GestureEvent) -> CarouselState:
        """Apply a gesture to the carousel."""
        if event in ADVANCING_GESTURES:
            return self.advance()
        if event in RETREATING_GESTURES:
            return self.retreat()
        raise ValueError(f"Unsupported gesture {event!r}")
