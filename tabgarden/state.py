"""Persistent tab activity for TabGarden.

Stores the last-active time of every tracked tab in a JSON file.
Includes basic schema versioning to allow future migrations.
"""

from __future__ import annotations

import json
import logging
import os
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, Optional

from .constants import CURRENT_SCHEMA_VERSION, STATE_FILENAME
from .entity import TabId, TabInfo, clamp_vigor

logger = logging.getLogger(__name__)

UTC = timezone.utc


def utc_now() -> datetime:
    """Return the current UTC time."""

    return datetime.now(UTC)


def to_iso(dt: datetime) -> str:
    """Convert a datetime to an ISO 8601 string."""

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat()


def from_iso(s: str) -> Optional[datetime]:
    """Parse an ISO 8601 string to datetime.

    Returns None on failure.
    """

    if not s or not isinstance(s, str):
        return None
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def initial_state() -> Dict[str, Any]:
    """Return a fresh initial state dict."""

    return {
        "schema_version": CURRENT_SCHEMA_VERSION,
        "tab_activity": {},
    }


def health_from_activity(last_active: datetime, now: datetime) -> float:
    """Wilt level for a tab last used at `last_active`.

    0 is fresh; 1 is fully wilted. Anything at or above 0.7 draws wilted.
    """

    hours = max(0.0, (now - last_active).total_seconds() / 3600.0)
    if hours < 1:
        return 0.0
    if hours < 24:
        return 0.1 + (hours / 24) * 0.4
    if hours < 72:
        return 0.5 + ((hours - 24) / 48) * 0.2
    days_over_3 = (hours - 72) / 24
    return min(1.0, 0.7 + days_over_3 * 0.1)


@dataclass
class ActivityStore:
    """Encapsulates all tab-activity persistence operations."""

    base_dir: str
    data: Dict[str, Any] = field(default_factory=initial_state)

    @property
    def path(self) -> str:
        """Return the path to the JSON state file."""

        return os.path.join(self.base_dir, STATE_FILENAME)

    # ------------------------------------------------------------------
    # Loading / saving / migration
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Load state from disk, creating a default file if necessary."""

        if not os.path.exists(self.path):
            self.data = initial_state()
            self._save()
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                loaded = json.load(f)
        except (OSError, ValueError):
            logger.warning("Activity file %s is unreadable; starting fresh", self.path, exc_info=True)
            self.data = initial_state()
            self._save()
            return

        if not isinstance(loaded, dict):
            self.data = initial_state()
            self._save()
            return

        self.data = self._migrate(loaded)
        self._ensure_defaults()
        self._save()  # Save back in canonical format.

    def _migrate(self, loaded: Dict[str, Any]) -> Dict[str, Any]:
        version = int(loaded.get("schema_version", 0) or 0)
        if version < 1:
            # Pre-versioned files stored the bare mapping under "tabActivity".
            legacy = loaded.pop("tabActivity", None)
            if isinstance(legacy, dict) and "tab_activity" not in loaded:
                loaded["tab_activity"] = legacy
        loaded["schema_version"] = CURRENT_SCHEMA_VERSION
        return loaded

    def _ensure_defaults(self) -> None:
        """Ensure required keys are present and every timestamp parses."""

        activity = self.data.get("tab_activity")
        if not isinstance(activity, dict):
            activity = {}
        clean: Dict[str, str] = {}
        for key, value in activity.items():
            if isinstance(value, (int, float)):
                # Browser stores epoch milliseconds.
                try:
                    value = to_iso(datetime.fromtimestamp(value / 1000.0, UTC))
                except (OverflowError, OSError, ValueError):
                    logger.warning("Dropping out-of-range activity time for tab %s: %r", key, value)
                    continue
            if from_iso(value) is not None:
                clean[str(key)] = value
        self.data["tab_activity"] = clean

    def _save(self) -> None:
        try:
            os.makedirs(self.base_dir, exist_ok=True)
            tmp_path = self.path + ".tmp"
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except OSError:
            logger.exception("Failed to save activity state to %s", self.path)

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------
    def _activity(self) -> Dict[str, str]:
        return self.data.setdefault("tab_activity", {})

    def last_active(self, tab_id: TabId) -> Optional[datetime]:
        return from_iso(self._activity().get(str(tab_id), ""))

    def tracked_ids(self) -> set[str]:
        return set(self._activity())

    # ------------------------------------------------------------------
    # Write API
    # ------------------------------------------------------------------
    def touch(self, tab_id: TabId, when: Optional[datetime] = None) -> None:
        """Record `tab_id` as active at `when` (default: now)."""

        self._activity()[str(tab_id)] = to_iso(when or utc_now())
        self._save()

    def forget(self, tab_id: TabId) -> bool:
        removed = self._activity().pop(str(tab_id), None) is not None
        if removed:
            self._save()
        return removed

    def prune(self, live_ids: Iterable[TabId]) -> int:
        """Drop entries for tabs that are no longer open. Returns the count."""

        live = {str(t) for t in live_ids}
        activity = self._activity()
        stale = [k for k in activity if k not in live]
        for k in stale:
            del activity[k]
        if stale:
            self._save()
        return len(stale)


class ActivityVigor:
    """Vigor source backed by the activity store.

    Tabs with no recorded activity count as just used.
    """

    def __init__(self, store: ActivityStore, clock: Callable[[], datetime] = utc_now) -> None:
        self.store = store
        self.clock = clock

    def __call__(self, tab: TabInfo, rng: random.Random) -> float:
        now = self.clock()
        last = self.store.last_active(tab.id) or now
        return clamp_vigor(health_from_activity(last, now))
