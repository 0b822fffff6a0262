"""Clock port used for time-based profile defaults."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Final, Protocol, runtime_checkable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

LOCALTIME_PATH: Final = Path("/etc/localtime")


@runtime_checkable
class Clock(Protocol):
    @property
    def local_offset(self) -> datetime:
        """Current local time as an aware datetime."""
        ...

    @property
    def local_time_zone_id(self) -> str:
        """IANA zone key of the local time zone, e.g. ``Europe/Berlin``."""
        ...


class SystemClock:
    """Clock backed by the host's local time zone."""

    @property
    def local_offset(self) -> datetime:
        return datetime.now().astimezone()

    @property
    def local_time_zone_id(self) -> str:
        """The host's IANA zone key.

        Read from ``TZ`` or the ``/etc/localtime`` link. Hosts that expose
        neither fall back to the zone abbreviation from ``tzname()``.
        """

        key = local_zone_key()
        if key is not None:
            return key
        return datetime.now().astimezone().tzname() or "UTC"


def local_zone_key() -> str | None:
    candidates: list[str] = []
    configured = os.getenv("TZ", "").strip().lstrip(":")
    if configured:
        candidates.append(configured)
    if LOCALTIME_PATH.is_symlink():
        _, found, key = str(LOCALTIME_PATH.resolve()).partition("zoneinfo/")
        if found:
            candidates.append(key)

    for candidate in candidates:
        try:
            ZoneInfo(candidate)
        except (ZoneInfoNotFoundError, ValueError):
            continue
        return candidate
    return None


__all__ = ["Clock", "SystemClock", "local_zone_key"]
