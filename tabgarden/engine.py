"""The garden engine: one object owning plants, viewport and animation.

Layout, the frame cycle and hover handling all read the same entity list
through this object; nothing lives at module level.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, Iterable, List, Optional

from PyQt6.QtGui import QPainter

from .entity import PlantEntity, TabId, TabInfo, VigorSource, create_entity
from .hit_test import HoverController
from .layout import content_height, layout
from .scheduler import AnimationScheduler, CancellationToken, FrameRequester
from .settings import GardenSettings

logger = logging.getLogger(__name__)


class _NullTooltip:
    def show(self, text: str, x: float, y: float) -> None:
        pass

    def hide(self) -> None:
        pass


def _no_frames(callback) -> None:
    pass


class GardenEngine:
    """Maps a tab list to laid-out, animated plants."""

    def __init__(
        self,
        settings: Optional[GardenSettings] = None,
        *,
        rng: Optional[random.Random] = None,
        vigor_source: Optional[VigorSource] = None,
        tooltip=None,
        request_frame: Optional[FrameRequester] = None,
        repaint=None,
        token: Optional[CancellationToken] = None,
    ) -> None:
        self.settings = settings or GardenSettings()
        self.rng = rng or random.Random()
        self.vigor_source = vigor_source
        self.width = 0.0
        self.height = 0.0
        self._by_id: Dict[TabId, PlantEntity] = {}
        self._next_order = 0
        self.scheduler = AnimationScheduler(
            request_frame or _no_frames,
            repaint or (lambda: None),
            token=token,
            animate=self.settings.animations_enabled,
            max_visible=self.settings.max_visible_plants,
        )
        self.hover = HoverController(tooltip or _NullTooltip(), self.settings.hover_radius)

    # ------------------------------------------------------------------
    # Entity collection
    # ------------------------------------------------------------------
    @property
    def entities(self) -> List[PlantEntity]:
        """Live plants in layout order."""

        return sorted(self._by_id.values(), key=lambda e: e.order)

    def get(self, tab_id: TabId) -> Optional[PlantEntity]:
        return self._by_id.get(tab_id)

    def __len__(self) -> int:
        return len(self._by_id)

    def _create(self, tab: TabInfo) -> PlantEntity:
        entity = create_entity(tab, order=self._next_order, rng=self.rng, vigor_source=self.vigor_source)
        self._next_order += 1
        self._by_id[tab.id] = entity
        return entity

    def initialize(self, tabs: Iterable[TabInfo]) -> List[PlantEntity]:
        """Replace every plant with a fresh one per tab, then lay out."""

        self._by_id.clear()
        self.hover.pointer_left()
        for tab in tabs:
            if tab.id in self._by_id:
                logger.warning("Duplicate tab id %r in tab list; keeping the first", tab.id)
                continue
            self._create(tab)
        logger.info("Garden initialized with %d plants", len(self._by_id))
        self.relayout()
        return self.entities

    def reconcile(self, tabs: Iterable[TabInfo]) -> None:
        """Match the plant set to `tabs` without resetting surviving plants.

        Survivors keep their order key, phase, rate and vigor; only their
        label and URL change. New tabs are appended after existing plants.
        """

        seen = set()
        added = 0
        for tab in tabs:
            if tab.id in seen:
                continue
            seen.add(tab.id)
            existing = self._by_id.get(tab.id)
            if existing is None:
                self._create(tab)
                added += 1
            else:
                existing.update_from_tab(tab)

        stale = [tab_id for tab_id in self._by_id if tab_id not in seen]
        for tab_id in stale:
            self._drop(tab_id)

        if added or stale:
            logger.debug("Reconciled garden: +%d -%d", added, len(stale))
        self.relayout()

    def tab_created(self, tab: TabInfo) -> PlantEntity:
        entity = self._by_id.get(tab.id)
        if entity is not None:
            entity.update_from_tab(tab)
            return entity
        entity = self._create(tab)
        self.relayout()
        return entity

    def tab_updated(self, tab: TabInfo) -> bool:
        entity = self._by_id.get(tab.id)
        if entity is None:
            return False
        entity.update_from_tab(tab)
        return True

    def tab_removed(self, tab_id: TabId) -> bool:
        if tab_id not in self._by_id:
            return False
        self._drop(tab_id)
        self.relayout()
        return True

    def _drop(self, tab_id: TabId) -> None:
        entity = self._by_id.pop(tab_id)
        if self.hover.hovered is entity:
            self.hover.pointer_left()

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------
    def resize(self, width: float, height: float) -> bool:
        """Record the new viewport and re-run layout. Phase is untouched."""

        self.width = float(width)
        self.height = float(height)
        return self.relayout()

    def relayout(self) -> bool:
        return layout(self.entities, self.width, self.height, self.settings.cell_spacing)

    def content_height(self, viewport_width: float, viewport_height: float) -> float:
        return content_height(len(self._by_id), viewport_width, viewport_height, self.settings.cell_spacing)

    # ------------------------------------------------------------------
    # Frame cycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        self.scheduler.start()

    def draw_frame(self, painter: QPainter) -> bool:
        return self.scheduler.tick(painter, self.entities, self.width, self.height)

    def shutdown(self) -> None:
        self.scheduler.cancel()
        self.hover.pointer_left()
        logger.debug("Garden engine shut down")

    # ------------------------------------------------------------------
    # Pointer
    # ------------------------------------------------------------------
    def pointer_moved(self, x: float, y: float) -> Optional[PlantEntity]:
        visible = self.scheduler.visible(self.entities)
        return self.hover.pointer_moved(visible, x, y, self.width)

    def pointer_left(self) -> None:
        self.hover.pointer_left()
