"""
Utility functions for AnxietyJournal.
"""

import logging
import time
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from anxietyjournal.core.models import Level


def now_ms() -> int:
    """Current wall-clock time in milliseconds since epoch."""
    return int(time.time() * 1000)


def _to_local(timestamp: int, tz: str) -> datetime:
    utc_time = datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)
    return utc_time.astimezone(ZoneInfo(tz))


def format_entry_date(timestamp: int, tz: str = "UTC") -> str:
    """
    Format an entry timestamp for list display.

    Examples:
        1760780040000 (UTC) -> "Oct 18, 09:34 AM"

    Args:
        timestamp: Milliseconds since epoch
        tz: IANA timezone name

    Returns:
        String like "Oct 18, 09:34 AM"
    """
    local = _to_local(timestamp, tz)
    return f"{local.strftime('%b')} {local.day}, {local.strftime('%I:%M %p')}"


def format_short_date(timestamp: int, tz: str = "UTC") -> str:
    """
    Format an entry timestamp as a short chart label.

    Examples:
        1760780040000 (UTC) -> "10/18"
    """
    local = _to_local(timestamp, tz)
    return f"{local.month}/{local.day}"


def level_color(level: Level) -> str:
    """Hex colour band for an anxiety level."""
    if level <= 1:
        return "#4CAF50"  # Green
    if level <= 2.5:
        return "#FFC107"  # Yellow
    if level <= 4:
        return "#FF9800"  # Orange
    return "#F44336"  # Red


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for command-line scripts."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
