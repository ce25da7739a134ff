"""Per-frame animation cycle for the garden.

The host owns the frame clock. The scheduler asks it for one frame at a time
through `request_frame`, and when that frame fires it asks the host to
repaint. The host's paint handler calls `tick()`, which draws the frame and
requests the next one. A frame is only requested while none is outstanding,
so extra paints (resize, expose) never start a second chain. If the host
stops painting, e.g. because the panel is hidden, the cycle pauses and picks
up again on the next paint.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Optional, Sequence

from PyQt6.QtGui import QPainter

from .entity import PlantEntity
from .render import clear, render

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]
FrameRequester = Callable[[FrameCallback], None]


class ErrorThrottle:
    """Rate-limits nonfatal error reporting.

    A failing draw repeats every frame; we log it at most once per
    `cooldown_s` per key.
    """

    def __init__(self, cooldown_s: float = 6.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.cooldown_s = float(cooldown_s)
        self._clock = clock
        self._last_by_key: Dict[str, float] = {}

    def should_show(self, key: str) -> bool:
        now = self._clock()
        last = self._last_by_key.get(key)
        if last is not None and (now - last) < self.cooldown_s:
            return False
        self._last_by_key[key] = now
        return True


class CancellationToken:
    """Set once when the hosting panel is torn down."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class AnimationScheduler:
    """Drives the clear / advance / render cycle, one host frame at a time."""

    def __init__(
        self,
        request_frame: FrameRequester,
        repaint: Callable[[], None],
        *,
        token: Optional[CancellationToken] = None,
        animate: bool = True,
        max_visible: int = 0,
        throttle: Optional[ErrorThrottle] = None,
    ) -> None:
        self._request_frame = request_frame
        self._repaint = repaint
        self.token = token or CancellationToken()
        self.animate = animate
        self.max_visible = max(0, int(max_visible))
        self._throttle = throttle or ErrorThrottle()
        self._running = False
        self._pending = False
        self.frame_count = 0

    @property
    def running(self) -> bool:
        return self._running and not self.token.cancelled

    @property
    def pending(self) -> bool:
        return self._pending

    def start(self) -> None:
        if self.token.cancelled:
            logger.debug("Not starting a cancelled scheduler")
            return
        self._running = True
        self._schedule()

    def cancel(self) -> None:
        """Stop the cycle; an outstanding frame becomes a no-op."""

        self.token.cancel()
        self._running = False

    def visible(self, entities: Sequence[PlantEntity]) -> List[PlantEntity]:
        """Entities drawn each frame; 0 means no cap."""

        if self.max_visible > 0:
            return list(entities[: self.max_visible])
        return list(entities)

    def tick(self, painter: QPainter, entities: Sequence[PlantEntity], width: float, height: float) -> bool:
        """Draw one frame. Returns False when the scheduler is cancelled."""

        if self.token.cancelled:
            return False

        try:
            clear(painter, width, height)
        except Exception:
            self._report("clear", "Garden: failed clearing the surface.")

        for entity in self.visible(entities):
            if self.animate:
                entity.advance()
            try:
                render(painter, entity.position, entity.phase, entity.vigor)
            except Exception:
                self._report("render", f"Garden: failed drawing plant {entity.id!r}.")

        self.frame_count += 1
        if self._running:
            self._schedule()
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _schedule(self) -> None:
        if self._pending or self.token.cancelled:
            return
        self._pending = True
        self._request_frame(self._on_frame)

    def _on_frame(self) -> None:
        self._pending = False
        if self.token.cancelled:
            logger.debug("Frame fired after cancellation; stopping")
            return
        self._repaint()

    def _report(self, key: str, msg: str) -> None:
        if self._throttle.should_show(key):
            logger.exception(msg)
