"""Draws a single plant: a swaying stem topped by a bloom or a wilted head."""

from __future__ import annotations

import math

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QColor, QPainter, QPainterPath, QPen

from .constants import (
    BACKGROUND_COLOR,
    BLOOM_CENTER_COLOR,
    BLOOM_PETAL_COLOR,
    ENTITY_SCALE,
    STEM_BASE_Y,
    STEM_COLOR,
    STEM_TIP_Y,
    SWAY_AMPLITUDE,
    WILT_COLOR,
    WILT_THRESHOLD,
)

GLYPH_BLOOM = "bloom"
GLYPH_WILT = "wilt"

BLOOM_OUTER_RADIUS = 9.0
BLOOM_INNER_RADIUS = 4.0
WILT_DROOP = 8.0
WILT_TILT_RAD = 0.3
WILT_RADII = (7.0, 4.0)


def sway_offset(phase: float) -> float:
    return SWAY_AMPLITUDE * math.sin(phase)


def glyph_for(vigor: float) -> str:
    """Bloom below the wilt threshold, wilt at or above it."""

    return GLYPH_BLOOM if vigor < WILT_THRESHOLD else GLYPH_WILT


def clear(painter: QPainter, width: float, height: float) -> None:
    """Paint the whole surface with the garden background."""

    painter.fillRect(QRectF(0, 0, width, height), QColor(BACKGROUND_COLOR))


def render(painter: QPainter, position: tuple[float, float], phase: float, vigor: float) -> None:
    """Draw one plant at `position`.

    Only the three state inputs are read; the painter's state is restored
    before returning.
    """

    x, y = position
    sway = sway_offset(phase)

    painter.save()
    try:
        painter.translate(QPointF(x, y))
        painter.scale(ENTITY_SCALE, ENTITY_SCALE)

        stem = QPainterPath(QPointF(0.0, STEM_BASE_Y))
        stem.quadTo(QPointF(sway * 0.5, (STEM_BASE_Y + STEM_TIP_Y) / 2), QPointF(sway, STEM_TIP_Y))
        pen = QPen(QColor(STEM_COLOR), 2.5)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPath(stem)

        painter.setPen(Qt.PenStyle.NoPen)
        if glyph_for(vigor) == GLYPH_BLOOM:
            _draw_bloom(painter, sway)
        else:
            _draw_wilt(painter, sway)
    finally:
        painter.restore()


def _draw_bloom(painter: QPainter, sway: float) -> None:
    tip = QPointF(sway, 0.0)
    painter.setBrush(QColor(BLOOM_PETAL_COLOR))
    painter.drawEllipse(tip, BLOOM_OUTER_RADIUS, BLOOM_OUTER_RADIUS)
    painter.setBrush(QColor(BLOOM_CENTER_COLOR))
    painter.drawEllipse(tip, BLOOM_INNER_RADIUS, BLOOM_INNER_RADIUS)


def _draw_wilt(painter: QPainter, sway: float) -> None:
    painter.translate(QPointF(sway, WILT_DROOP))
    painter.rotate(math.degrees(WILT_TILT_RAD))
    painter.setBrush(QColor(WILT_COLOR))
    rx, ry = WILT_RADII
    painter.drawEllipse(QPointF(0.0, 0.0), rx, ry)
