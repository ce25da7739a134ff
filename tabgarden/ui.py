"""Qt6 UI for the TabGarden side panel."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QIcon
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from .entity import TabInfo, VigorSource
from .garden_scene import GardenCanvas
from .icons import icon_pixmap
from .settings import GardenSettings

logger = logging.getLogger(__name__)

TabSource = Callable[[], List[TabInfo]]


class GardenPanel(QWidget):
    """Panel showing one plant per open tab."""

    def __init__(
        self,
        tab_source: TabSource,
        settings: Optional[GardenSettings] = None,
        *,
        vigor_source: Optional[VigorSource] = None,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.tab_source = tab_source
        self.settings = settings or GardenSettings()
        self.vigor_source = vigor_source

        self.setWindowTitle(self.settings.garden_name)
        self.setWindowIcon(QIcon(icon_pixmap("flower", 32)))
        self._build_ui()

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        """Create all widgets and layouts."""

        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        header = QWidget()
        header_layout = QHBoxLayout(header)
        header_layout.setContentsMargins(12, 8, 12, 8)
        logo = QLabel()
        logo.setPixmap(icon_pixmap("flower", 20))
        self.title_label = QLabel(self.settings.garden_name)
        self.title_label.setStyleSheet("QLabel { font-weight: bold; }")
        self.count_label = QLabel()
        self.refresh_btn = QPushButton()
        self.refresh_btn.setIcon(QIcon(icon_pixmap("refresh", 16)))
        self.refresh_btn.setToolTip("Refresh garden")
        self.refresh_btn.clicked.connect(self.on_refresh)
        header_layout.addWidget(logo)
        header_layout.addWidget(self.title_label)
        header_layout.addStretch(1)
        header_layout.addWidget(self.count_label)
        header_layout.addWidget(self.refresh_btn)
        main_layout.addWidget(header)

        self.canvas = GardenCanvas(self.settings, vigor_source=self.vigor_source)
        self.canvas.errorReported.connect(self.on_error)
        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        self.scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.scroll.setWidget(self.canvas)
        main_layout.addWidget(self.scroll, 1)

        self.status_label = QLabel()
        self.status_label.setStyleSheet("QLabel { color: #c0392b; padding: 4px 12px; }")
        self.status_label.hide()
        main_layout.addWidget(self.status_label)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def populate(self) -> None:
        """Query the tab source once and build the garden."""

        tabs = self._query_tabs()
        self.canvas.load_tabs(tabs)
        self._refresh_count()
        self.canvas.start()

    def on_refresh(self) -> None:
        self.canvas.reconcile(self._query_tabs())
        self._refresh_count()

    def on_error(self, msg: str) -> None:
        self.status_label.setText(msg)
        self.status_label.show()

    def _query_tabs(self) -> List[TabInfo]:
        try:
            return list(self.tab_source())
        except Exception:
            logger.exception("Tab source failed")
            self.on_error("TabGarden: could not read open tabs.")
            return []

    def _refresh_count(self) -> None:
        count = len(self.canvas.engine)
        self.count_label.setText(f"{count} tab" + ("" if count == 1 else "s"))

    def closeEvent(self, event) -> None:  # noqa: N802
        self.canvas.teardown()
        super().closeEvent(event)
