"""User settings for the garden panel.

Read from the JSON written by the options page. Keys may be camelCase (as the
options page writes them) or snake_case.
"""

from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import dataclass, fields
from typing import Any, Dict

from .constants import (
    CELL_SPACING,
    DEFAULT_GARDEN_NAME,
    DEFAULT_MAX_VISIBLE_PLANTS,
    DEFAULT_TARGET_FPS,
    HOVER_RADIUS,
    MAX_TARGET_FPS,
)

logger = logging.getLogger(__name__)

_CAMEL_KEYS = {
    "gardenName": "garden_name",
    "targetFps": "target_fps",
    "maxVisiblePlants": "max_visible_plants",
    "animationsEnabled": "animations_enabled",
    "cellSpacing": "cell_spacing",
    "hoverRadius": "hover_radius",
}


@dataclass
class GardenSettings:
    garden_name: str = DEFAULT_GARDEN_NAME
    target_fps: int = DEFAULT_TARGET_FPS
    max_visible_plants: int = DEFAULT_MAX_VISIBLE_PLANTS
    animations_enabled: bool = True
    cell_spacing: float = CELL_SPACING
    hover_radius: float = HOVER_RADIUS

    @property
    def frame_interval_ms(self) -> int:
        return max(1, round(1000 / self.target_fps))

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "GardenSettings":
        """Build settings from a raw mapping, keeping defaults for bad values."""

        settings = cls()
        known = {f.name for f in fields(cls)}
        for key, value in raw.items():
            name = _CAMEL_KEYS.get(key, key)
            if name not in known:
                continue
            try:
                setattr(settings, name, _coerce(name, value))
            except (TypeError, ValueError, OverflowError):
                logger.warning("Ignoring invalid setting %s=%r", key, value)
        return settings


def _finite(value: Any) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError("must be finite")
    return number


def _coerce(name: str, value: Any) -> Any:
    if name == "garden_name":
        text = str(value).strip()
        return text or DEFAULT_GARDEN_NAME
    if name == "animations_enabled":
        if not isinstance(value, bool):
            raise TypeError("expected a boolean")
        return value
    number = _finite(value)
    if name == "target_fps":
        return min(MAX_TARGET_FPS, max(1, int(number)))
    if name == "max_visible_plants":
        count = int(number)
        if count < 0:
            raise ValueError("must be >= 0")
        return count
    if number <= 0:
        raise ValueError("must be positive")
    return number


def load_settings(path: str) -> GardenSettings:
    """Load settings from `path`; missing or corrupt files give defaults."""

    if not os.path.exists(path):
        return GardenSettings()
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError):
        logger.warning("Settings file %s is unreadable; using defaults", path, exc_info=True)
        return GardenSettings()
    if not isinstance(raw, dict):
        logger.warning("Settings file %s does not hold an object; using defaults", path)
        return GardenSettings()
    return GardenSettings.from_dict(raw)
