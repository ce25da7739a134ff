"""Exception types raised by the garden engine."""

from __future__ import annotations


class TabGardenError(Exception):
    """Base class for TabGarden errors."""


class OriginParseError(TabGardenError, ValueError):
    """A tab URL could not be reduced to a hostname."""

    def __init__(self, url: str) -> None:
        super().__init__(f"cannot parse origin from {url!r}")
        self.url = url
