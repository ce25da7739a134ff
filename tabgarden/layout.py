"""Centered grid layout for garden plants."""

from __future__ import annotations

import logging
import math
from typing import Sequence

from .constants import CELL_SPACING, CONTENT_PADDING
from .entity import PlantEntity

logger = logging.getLogger(__name__)


def grid_shape(count: int, width: float, spacing: float = CELL_SPACING) -> tuple[int, int]:
    """Return (cols, rows) for `count` plants in a viewport `width` wide."""

    cols = max(1, math.floor(width / spacing)) if width > 0 else 1
    rows = max(1, math.ceil(count / cols))
    return cols, rows


def layout(
    entities: Sequence[PlantEntity],
    width: float,
    height: float,
    spacing: float = CELL_SPACING,
) -> bool:
    """Assign every entity a cell of a grid centered in the viewport.

    Entities are placed in sequence order, left to right then top to bottom.
    Positions are overwritten wholesale. Nothing is touched when there are no
    entities or the viewport has no area; returns whether a pass ran.
    """

    if not entities:
        return False
    if width <= 0 or height <= 0:
        logger.debug("Skipping layout for empty viewport %sx%s", width, height)
        return False

    count = len(entities)
    cols, rows = grid_shape(count, width, spacing)
    grid_width = min(count, cols) * spacing
    grid_height = rows * spacing
    origin_x = width / 2 - grid_width / 2 + spacing / 2
    origin_y = height / 2 - grid_height / 2 + spacing / 2

    for index, entity in enumerate(entities):
        col = index % cols
        row = index // cols
        entity.x = origin_x + col * spacing
        entity.y = origin_y + row * spacing
    return True


def content_height(
    count: int,
    width: float,
    viewport_height: float,
    spacing: float = CELL_SPACING,
) -> float:
    """Surface height needed so the grid fits; never below the viewport."""

    if count <= 0:
        return viewport_height
    _, rows = grid_shape(count, width, spacing)
    return max(viewport_height, rows * spacing + CONTENT_PADDING)
