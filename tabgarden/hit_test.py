"""Pointer hit-testing and hover tooltips."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Sequence
from urllib.parse import urlsplit

from .constants import (
    PLACEHOLDER_ORIGIN,
    TOOLTIP_OFFSET_X,
    TOOLTIP_OFFSET_Y,
    TOOLTIP_WIDTH,
    UNTITLED_LABEL,
)
from .entity import PlantEntity
from .errors import OriginParseError

logger = logging.getLogger(__name__)


def hit_test(
    entities: Iterable[PlantEntity],
    pointer_x: float,
    pointer_y: float,
    radius: float,
) -> Optional[PlantEntity]:
    """Return the entity within `radius` of the pointer, or None.

    Every entity is scanned; when several are in range the last one in
    iteration order wins.
    """

    match = None
    for entity in entities:
        if math.hypot(pointer_x - entity.x, pointer_y - entity.y) < radius:
            match = entity
    return match


def hostname_of(url: str) -> str:
    """Hostname of `url` without a leading ``www.``.

    Raises OriginParseError when the URL is malformed or has no host.
    """

    try:
        host = urlsplit(url).hostname
    except ValueError as exc:
        raise OriginParseError(url) from exc
    if not host:
        raise OriginParseError(url)
    if host.startswith("www."):
        host = host[4:]
    return host


def tooltip_text(entity: PlantEntity, origin: str) -> str:
    return f"{entity.label or UNTITLED_LABEL}\n{origin}"


def tooltip_position(pointer_x: float, pointer_y: float, width: Optional[float] = None) -> tuple[float, float]:
    """Place the tooltip up and to the right of the pointer, kept on-surface."""

    x = pointer_x + TOOLTIP_OFFSET_X
    if width is not None and width - TOOLTIP_WIDTH > 0:
        x = min(x, width - TOOLTIP_WIDTH)
    y = max(0.0, pointer_y + TOOLTIP_OFFSET_Y)
    return x, y


class HoverController:
    """Turns pointer moves into tooltip show/hide effects.

    `sink` is any object with ``show(text, x, y)`` and ``hide()``.
    """

    def __init__(self, sink, radius: float) -> None:
        self.sink = sink
        self.radius = float(radius)
        self.hovered: Optional[PlantEntity] = None

    def pointer_moved(
        self,
        entities: Sequence[PlantEntity],
        pointer_x: float,
        pointer_y: float,
        width: Optional[float] = None,
    ) -> Optional[PlantEntity]:
        match = hit_test(entities, pointer_x, pointer_y, self.radius)
        self.hovered = match
        if match is None:
            self.sink.hide()
            return None

        x, y = tooltip_position(pointer_x, pointer_y, width)
        self.sink.show(tooltip_text(match, self.origin_label(match)), x, y)
        return match

    def pointer_left(self) -> None:
        self.hovered = None
        self.sink.hide()

    def origin_label(self, entity: PlantEntity) -> str:
        """Hostname for the tooltip, or a placeholder when the URL is bad."""

        try:
            return hostname_of(entity.origin_url)
        except OriginParseError as exc:
            logger.debug("Tab %r: %s", entity.id, exc)
            return PLACEHOLDER_ORIGIN
