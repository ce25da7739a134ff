"""Stroke icons used by the panel chrome.

All icons are 20x20 SVG with a 1.5px round stroke; `get_icon` swaps in the
requested size and color.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QByteArray, Qt
from PyQt6.QtGui import QPainter, QPixmap
from PyQt6.QtSvg import QSvgRenderer

logger = logging.getLogger(__name__)

_SVG_OPEN = (
    '<svg width="20" height="20" viewBox="0 0 20 20" fill="none" stroke="currentColor" '
    'stroke-width="1.5" stroke-linecap="round" stroke-linejoin="round">'
)

ICONS = {
    "flower": _SVG_OPEN
    + '<circle cx="10" cy="7" r="2.5"/><circle cx="7" cy="9" r="2.5"/>'
    '<circle cx="13" cy="9" r="2.5"/><circle cx="8" cy="12" r="2.5"/>'
    '<circle cx="12" cy="12" r="2.5"/>'
    '<circle cx="10" cy="10" r="2" fill="currentColor" stroke="none"/>'
    '<path d="M10 14v4"/></svg>',
    "seedling": _SVG_OPEN
    + '<path d="M10 18v-8"/><path d="M10 14c-4 0-6-3-6-6 3 0 6 2 6 6z"/>'
    '<path d="M10 10c4 0 6-3 6-6-3 0-6 2-6 6z"/></svg>',
    "leaf": _SVG_OPEN
    + '<path d="M5 17c0-8 4-12 12-14-2 8-6 12-12 14z"/><path d="M5 17c4-4 8-8 12-14"/></svg>',
    "leafDroop": _SVG_OPEN
    + '<path d="M6 12c0-6 3-9 9-10-1.5 6-4.5 9-9 10z"/><path d="M6 12c3-3 6-6 9-10"/>'
    '<path d="M6 12c-1 2-2 4-1 6"/></svg>',
    "refresh": _SVG_OPEN
    + '<path d="M3 10a7 7 0 0 1 12.9-3.8"/><path d="M17 10a7 7 0 0 1-12.9 3.8"/>'
    '<path d="M16 2v4h-4"/><path d="M4 18v-4h4"/></svg>',
    "close": _SVG_OPEN + '<path d="M5 5l10 10M15 5L5 15"/></svg>',
}


def get_icon(name: str, size: int = 20, color: str = "currentColor") -> str:
    """SVG markup for `name` at `size` px stroked with `color`.

    Unknown names are logged and give an empty string.
    """

    icon = ICONS.get(name)
    if icon is None:
        logger.warning('Icon "%s" not found', name)
        return ""
    return (
        icon.replace('width="20"', f'width="{size}"')
        .replace('height="20"', f'height="{size}"')
        .replace('stroke="currentColor"', f'stroke="{color}"')
    )


def icon_pixmap(name: str, size: int = 20, color: str = "#e8f0e4") -> QPixmap:
    """Rasterize an icon; a missing icon gives a null pixmap."""

    markup = get_icon(name, size, color)
    if not markup:
        return QPixmap()
    renderer = QSvgRenderer(QByteArray(markup.encode("utf-8")))
    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.GlobalColor.transparent)
    painter = QPainter(pixmap)
    try:
        renderer.render(painter)
    finally:
        painter.end()
    return pixmap
