"""Qt drawing surface that hosts the garden engine.

This module is intentionally UI-focused: it forwards Qt's paint, resize and
pointer events into `GardenEngine` and provides the frame clock and tooltip
the engine draws through.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Iterable, Optional

from PyQt6.QtCore import QPoint, Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QPainter
from PyQt6.QtWidgets import QToolTip, QWidget

from .engine import GardenEngine
from .entity import TabInfo, VigorSource
from .scheduler import ErrorThrottle
from .settings import GardenSettings

logger = logging.getLogger(__name__)


class QtTooltip:
    """Tooltip sink backed by QToolTip, positioned in widget coordinates."""

    def __init__(self, widget: QWidget) -> None:
        self.widget = widget
        self.text: Optional[str] = None

    def show(self, text: str, x: float, y: float) -> None:
        if text == self.text and QToolTip.isVisible():
            return
        self.text = text
        QToolTip.showText(self.widget.mapToGlobal(QPoint(int(x), int(y))), text, self.widget)

    def hide(self) -> None:
        if self.text is None:
            return
        self.text = None
        QToolTip.hideText()


class GardenCanvas(QWidget):
    """Immediate-mode canvas: one repaint per animation frame."""

    errorReported = pyqtSignal(str)

    def __init__(
        self,
        settings: Optional[GardenSettings] = None,
        *,
        vigor_source: Optional[VigorSource] = None,
        rng: Optional[random.Random] = None,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.settings = settings or GardenSettings()
        self.setMouseTracking(True)
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent, True)
        self._err_throttle = ErrorThrottle(cooldown_s=6.0)

        self._frame_callback: Optional[Callable[[], None]] = None
        self._frame_timer = QTimer(self)
        self._frame_timer.setSingleShot(True)
        self._frame_timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._frame_timer.setInterval(self.settings.frame_interval_ms)
        self._frame_timer.timeout.connect(self._fire_frame)

        self.tooltip = QtTooltip(self)
        self.engine = GardenEngine(
            self.settings,
            rng=rng,
            vigor_source=vigor_source,
            tooltip=self.tooltip,
            request_frame=self._request_frame,
            repaint=self.update,
        )

    def _report_nonfatal(self, key: str, msg: str, *, exc_info: bool = False) -> None:
        """Log exception and (rate-limited) surface it; never raises."""

        if exc_info:
            logger.exception(msg)
        else:
            logger.warning(msg)
        if self._err_throttle.should_show(key):
            self.errorReported.emit(msg)

    # Frame clock ------------------------------------------------------
    def _request_frame(self, callback: Callable[[], None]) -> None:
        self._frame_callback = callback
        self._frame_timer.start()

    def _fire_frame(self) -> None:
        callback, self._frame_callback = self._frame_callback, None
        if callback is not None:
            callback()

    # Engine wiring ----------------------------------------------------
    def load_tabs(self, tabs: Iterable[TabInfo]) -> None:
        try:
            self.engine.initialize(tabs)
            self._sync_content_height()
            self.update()
        except Exception:
            self._report_nonfatal("load_tabs", "TabGarden: failed building the garden.", exc_info=True)

    def reconcile(self, tabs: Iterable[TabInfo]) -> None:
        try:
            self.engine.reconcile(tabs)
            self._sync_content_height()
        except Exception:
            self._report_nonfatal("reconcile", "TabGarden: failed updating the garden.", exc_info=True)

    def start(self) -> None:
        self.engine.start()

    def teardown(self) -> None:
        """Stop the frame cycle for good."""

        self.engine.shutdown()
        self._frame_timer.stop()
        self._frame_callback = None

    def _sync_content_height(self) -> None:
        """Grow inside a scroll area so every row of plants fits."""

        parent = self.parentWidget()
        if parent is None:
            return
        needed = int(self.engine.content_height(self.width(), parent.height()))
        if needed != self.minimumHeight():
            self.setMinimumHeight(needed)

    # Qt events --------------------------------------------------------
    def paintEvent(self, event) -> None:  # noqa: N802
        # Never raise from paintEvent; the engine keeps its own frame errors.
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            self.engine.draw_frame(painter)
        except Exception:
            self._report_nonfatal("paint", "TabGarden: rendering error (see log).", exc_info=True)
        finally:
            painter.end()

    def resizeEvent(self, event) -> None:  # noqa: N802
        try:
            size = event.size()
            self.engine.resize(size.width(), size.height())
            self._sync_content_height()
        except Exception:
            self._report_nonfatal("resize", "TabGarden: failed laying out the garden.", exc_info=True)
        super().resizeEvent(event)

    def mouseMoveEvent(self, event) -> None:  # noqa: N802
        try:
            pos = event.position()
            self.engine.pointer_moved(pos.x(), pos.y())
        except Exception:
            self._report_nonfatal("mouseMoveEvent", "TabGarden: error handling mouse move.", exc_info=True)
        super().mouseMoveEvent(event)

    def leaveEvent(self, event) -> None:  # noqa: N802
        self.engine.pointer_left()
        super().leaveEvent(event)
