"""Entry point: ``python -m tabgarden [tabs.json]``."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from .constants import SETTINGS_FILENAME
from .entity import TabInfo
from .logging_config import setup_logging
from .settings import load_settings
from .state import ActivityStore, ActivityVigor
from .tracker import ActivityTracker

logger = logging.getLogger("tabgarden.main")

DEFAULT_STATE_DIR = os.path.join(os.path.expanduser("~"), ".tabgarden")


def read_tabs(path: Optional[str]) -> List[TabInfo]:
    """Read a JSON array of ``{id, title, url}`` records."""

    if not path:
        return []
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON array of tabs")
    tabs = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ValueError(f"{path}: tab #{index} is not an object")
        tabs.append(TabInfo.from_dict(item))
    return tabs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tabgarden", description="Show open tabs as a garden.")
    parser.add_argument("tabs", nargs="?", help="JSON file with the open tabs")
    parser.add_argument("--settings", help="settings JSON (default: <state-dir>/%s)" % SETTINGS_FILENAME)
    parser.add_argument("--state-dir", default=DEFAULT_STATE_DIR, help="where tab activity is kept")
    parser.add_argument("--log-file", help="also write the log to this file")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO, args.log_file)

    settings = load_settings(args.settings or os.path.join(args.state_dir, SETTINGS_FILENAME))
    store = ActivityStore(base_dir=args.state_dir)
    store.load()

    def tab_source() -> List[TabInfo]:
        return read_tabs(args.tabs)

    try:
        tabs = tab_source()
    except (OSError, ValueError, KeyError) as exc:
        logger.error("Cannot read tabs: %s", exc)
        return 2
    ActivityTracker(store).reconcile(tab.id for tab in tabs)

    from PyQt6.QtWidgets import QApplication

    from .ui import GardenPanel

    app = QApplication(sys.argv[:1])
    panel = GardenPanel(tab_source, settings, vigor_source=ActivityVigor(store))
    app.aboutToQuit.connect(panel.canvas.teardown)
    panel.resize(420, 640)
    panel.show()
    panel.populate()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
