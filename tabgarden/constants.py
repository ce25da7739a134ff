"""Constants for the TabGarden panel."""

from __future__ import annotations

import math

# Grid cell size in pixels (one plant per cell)
CELL_SPACING: float = 80.0

# Extra vertical room below the grid when the garden scrolls
CONTENT_PADDING: float = 140.0

# Pointer distance (px) that counts as hovering a plant
HOVER_RADIUS: float = 40.0

# Render geometry, in unscaled plant units
ENTITY_SCALE: float = 1.4
SWAY_AMPLITUDE: float = 2.0
STEM_BASE_Y: float = 35.0
STEM_TIP_Y: float = 5.0

# Vigor at or above this draws the wilted glyph
WILT_THRESHOLD: float = 0.7

# Per-frame phase increment range [low, high)
PHASE_RATE_RANGE = (0.008, 0.018)
FULL_TURN: float = 2 * math.pi

# Tooltip placement relative to the pointer
TOOLTIP_OFFSET_X: float = 20.0
TOOLTIP_OFFSET_Y: float = -60.0
TOOLTIP_WIDTH: float = 200.0
UNTITLED_LABEL = "Untitled"
PLACEHOLDER_ORIGIN = "Tab"

# Default settings (mirrors the options page)
DEFAULT_GARDEN_NAME = "My Digital Sanctuary"
DEFAULT_TARGET_FPS: int = 60
DEFAULT_MAX_VISIBLE_PLANTS: int = 50
MAX_TARGET_FPS: int = 240

# Colors (hex)
BACKGROUND_COLOR = "#1e2a24"
STEM_COLOR = "#4a7c3f"
BLOOM_PETAL_COLOR = "#ffb7c5"
BLOOM_CENTER_COLOR = "#ffd36e"
WILT_COLOR = "#8b6b3e"

# Persistence / schema
SETTINGS_FILENAME = "tabgarden_settings.json"
STATE_FILENAME = "tabgarden_activity.json"
CURRENT_SCHEMA_VERSION = 1
