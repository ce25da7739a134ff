"""Entity model: one plant per tracked browser tab."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from .constants import FULL_TURN, PHASE_RATE_RANGE

TabId = Union[int, str]

# Largest float below 1.0; keeps vigor inside [0, 1).
_VIGOR_CEILING = 1.0 - 2 ** -53


@dataclass(frozen=True)
class TabInfo:
    """Minimal view of a browser tab as reported by the tab source."""

    id: TabId
    title: str = ""
    url: str = ""

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "TabInfo":
        """Build from the browser's `{id, title, url}` record."""

        if "id" not in raw:
            raise KeyError("tab record has no 'id'")
        return cls(
            id=raw["id"],
            title=str(raw.get("title") or ""),
            url=str(raw.get("url") or ""),
        )


@dataclass
class PlantEntity:
    """Visual and animation state for a single tab."""

    id: TabId
    label: str
    origin_url: str
    vigor: float
    phase: float
    phase_rate: float
    # Stable enumeration key used by layout; never reassigned.
    order: int
    x: float = 0.0
    y: float = 0.0

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    def advance(self) -> None:
        """Move the animation phase forward by one frame."""

        self.phase += self.phase_rate

    def update_from_tab(self, tab: TabInfo) -> None:
        """Refresh display metadata; animation state is kept."""

        self.label = tab.title
        self.origin_url = tab.url


VigorSource = Callable[[TabInfo, random.Random], float]


def random_vigor(tab: TabInfo, rng: random.Random) -> float:
    """Default vigor source: uniform in [0, 1)."""

    return rng.random()


def clamp_vigor(value: float) -> float:
    return min(max(0.0, float(value)), _VIGOR_CEILING)


def create_entity(
    tab: TabInfo,
    *,
    order: int,
    rng: random.Random,
    vigor_source: Optional[VigorSource] = None,
) -> PlantEntity:
    """Create a plant for `tab` with randomized phase, rate and vigor."""

    source = vigor_source or random_vigor
    low, high = PHASE_RATE_RANGE
    return PlantEntity(
        id=tab.id,
        label=tab.title,
        origin_url=tab.url,
        vigor=clamp_vigor(source(tab, rng)),
        phase=rng.random() * FULL_TURN,
        phase_rate=low + rng.random() * (high - low),
        order=order,
    )
