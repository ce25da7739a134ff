"""Tab lifecycle tracking for TabGarden.

Receives the browser's tab events and keeps the activity store current.
The garden reads the store once, when plants are created.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable

from .entity import TabId
from .state import ActivityStore, utc_now

logger = logging.getLogger(__name__)


@dataclass
class ActivityTracker:
    """Updates last-active timestamps on tab events."""

    store: ActivityStore
    clock: Callable[[], datetime] = utc_now

    def handle_created(self, tab_id: TabId) -> None:
        self.store.touch(tab_id, self.clock())

    def handle_activated(self, tab_id: TabId) -> None:
        self.store.touch(tab_id, self.clock())

    def handle_updated(self, tab_id: TabId, change_info: Dict[str, Any]) -> bool:
        """Count a finished page load as activity.

        Intermediate updates (title, favicon, loading) are ignored.
        """

        if change_info.get("status") != "complete":
            return False
        self.store.touch(tab_id, self.clock())
        return True

    def handle_removed(self, tab_id: TabId) -> None:
        self.store.forget(tab_id)

    def reconcile(self, live_ids: Iterable[TabId]) -> int:
        """Drop entries for tabs closed while the panel was not running."""

        removed = self.store.prune(live_ids)
        if removed:
            logger.info("Pruned %d stale tab activity entries", removed)
        return removed
