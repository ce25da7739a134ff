"""Test doubles for the drawing surface, frame clock and tooltip."""

from __future__ import annotations

import random
from typing import Any, List, Tuple

from tabgarden.entity import PlantEntity


class RecordingPainter:
    """Stands in for QPainter; records every call as (name, args)."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, tuple]] = []

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)

        def record(*args):
            self.calls.append((name, args))

        return record

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def of(self, name: str) -> List[tuple]:
        return [args for n, args in self.calls if n == name]


class FrameQueue:
    """Collects frame requests so tests can fire them by hand."""

    def __init__(self) -> None:
        self.callbacks = []

    def __call__(self, callback) -> None:
        self.callbacks.append(callback)

    def fire(self) -> None:
        callbacks, self.callbacks = self.callbacks, []
        for cb in callbacks:
            cb()


class RecordingTooltip:
    def __init__(self) -> None:
        self.shown: List[Tuple[str, float, float]] = []
        self.hides = 0
        self.visible = False

    def show(self, text: str, x: float, y: float) -> None:
        self.shown.append((text, x, y))
        self.visible = True

    def hide(self) -> None:
        self.hides += 1
        self.visible = False


def make_entity(tab_id, x=0.0, y=0.0, *, label="", url="https://example.com/", vigor=0.2, phase=0.0, rate=0.01, order=None):
    return PlantEntity(
        id=tab_id,
        label=label,
        origin_url=url,
        vigor=vigor,
        phase=phase,
        phase_rate=rate,
        order=tab_id if order is None else order,
        x=x,
        y=y,
    )


def seeded(seed: int = 7) -> random.Random:
    return random.Random(seed)
