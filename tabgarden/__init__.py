"""TabGarden - your open browser tabs as an animated garden.

Package layout:
- Engine core (entity model, layout, scheduler, render, hit-testing)
- Tab activity store and lifecycle tracker
- Qt canvas and side panel
"""

from __future__ import annotations

from .engine import GardenEngine
from .entity import PlantEntity, TabInfo
from .errors import OriginParseError, TabGardenError
from .settings import GardenSettings, load_settings

__version__ = "0.4.0"

__all__ = [
    "GardenEngine",
    "GardenSettings",
    "OriginParseError",
    "PlantEntity",
    "TabGardenError",
    "TabInfo",
    "load_settings",
]
