from __future__ import annotations

from typing import Any

import pytest

from maplog.core.collaborators import (
    ListClickHandler,
    PickHandler,
    PositionCallback,
    PositionErrorCallback,
    WorkoutSummary,
)
from maplog.core.controller import WorkoutController
from maplog.workout.model import Coords


class FakeMap:
    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.pick_handler: PickHandler | None = None

    def init_view(self, coords: Coords, zoom: int) -> None:
        self.calls.append(("init_view", coords, zoom))

    def on_location_pick(self, handler: PickHandler) -> None:
        self.pick_handler = handler

    def place_marker(self, coords: Coords, popup_label: str, style: str) -> None:
        self.calls.append(("place_marker", coords, popup_label, style))

    def pan_to(self, coords: Coords, zoom: int) -> None:
        self.calls.append(("pan_to", coords, zoom))

    def named(self, name: str) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == name]


class FakeForm:
    def __init__(self) -> None:
        self.visible = False
        self.cleared = 0
        self.field_kind: str | None = None
        self.entries: list[WorkoutSummary] = []
        self.alerts: list[str] = []
        self.click_handler: ListClickHandler | None = None

    def show_form(self) -> None:
        self.visible = True

    def hide_form_and_clear(self) -> None:
        self.visible = False
        self.cleared += 1

    def toggle_fields_for_type(self, kind: str) -> None:
        self.field_kind = kind

    def render_list_entry(self, summary: WorkoutSummary) -> None:
        self.entries.append(summary)

    def on_list_item_click(self, handler: ListClickHandler) -> None:
        self.click_handler = handler

    def alert(self, message: str) -> None:
        self.alerts.append(message)


class MemoryStorage:
    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})
        self.writes = 0

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.writes += 1
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FakeGeolocation:
    """Holds callbacks until the test resolves or fails the request."""

    def __init__(self) -> None:
        self.requests = 0
        self._pending: tuple[PositionCallback, PositionErrorCallback] | None = None

    def request_current_position(
        self,
        on_success: PositionCallback,
        on_error: PositionErrorCallback,
    ) -> None:
        self.requests += 1
        self._pending = (on_success, on_error)

    def resolve(self, coords: Coords) -> None:
        assert self._pending is not None
        on_success, _ = self._pending
        self._pending = None
        on_success(coords)

    def fail(self, message: str = "User denied Geolocation") -> None:
        assert self._pending is not None
        _, on_error = self._pending
        self._pending = None
        on_error(message)


@pytest.fixture
def fake_map() -> FakeMap:
    return FakeMap()


@pytest.fixture
def fake_form() -> FakeForm:
    return FakeForm()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def geolocation() -> FakeGeolocation:
    return FakeGeolocation()


@pytest.fixture
def reloads() -> list[int]:
    return []


@pytest.fixture
def controller(
    fake_map: FakeMap,
    fake_form: FakeForm,
    storage: MemoryStorage,
    geolocation: FakeGeolocation,
    reloads: list[int],
) -> WorkoutController:
    return WorkoutController(
        map_view=fake_map,
        form=fake_form,
        storage=storage,
        geolocation=geolocation,
        reload=lambda: reloads.append(1),
    )
