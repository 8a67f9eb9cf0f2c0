"""
Insights module.

Trend series and summary statistics over anxiety entries.
Pure functions: callers load entries from the store first.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from anxietyjournal.core.models import AnxietyEntry, Level, NewEntry
from anxietyjournal.core.utils import format_short_date, now_ms

logger = logging.getLogger(__name__)

MS_PER_DAY = 24 * 60 * 60 * 1000


@dataclass
class ChartSeries:
    """Labels and values for the level trend chart."""

    labels: List[str]
    values: List[Level]


@dataclass
class EntrySummary:
    """Summary statistics over a set of entries."""

    count: int = 0
    average_level: Optional[float] = None
    min_level: Optional[Level] = None
    max_level: Optional[Level] = None
    top_category: Optional[str] = None
    category_counts: Dict[str, int] = field(default_factory=dict)


def is_empty_entry(new_entry: NewEntry) -> bool:
    """True when an entry carries no information at all."""
    return (
        new_entry.level == 0
        and not new_entry.category
        and not new_entry.notes.strip()
    )


def chart_series(
    entries: List[AnxietyEntry], window: int = 7, tz: str = "UTC"
) -> ChartSeries:
    """
    Build the trend series from the most recent entries.

    Entries are ordered oldest first and only the last `window` are kept.
    With no entries a single empty placeholder point is returned.
    """
    if not entries:
        return ChartSeries(labels=[""], values=[0])

    ordered = sorted(entries, key=lambda entry: entry.timestamp)
    recent = ordered[-window:] if window > 0 else []

    return ChartSeries(
        labels=[format_short_date(entry.timestamp, tz) for entry in recent],
        values=[entry.level for entry in recent],
    )


def summarize(
    entries: List[AnxietyEntry],
    days: Optional[int] = None,
    current_ms: Optional[int] = None,
) -> EntrySummary:
    """
    Calculate summary statistics, optionally for the past N days only.

    Entries without a category are not counted as a trigger.
    """
    if days is not None:
        cutoff = (current_ms if current_ms is not None else now_ms()) - days * MS_PER_DAY
        entries = [entry for entry in entries if entry.timestamp >= cutoff]

    if not entries:
        return EntrySummary()

    levels = [entry.level for entry in entries]
    categories = Counter(entry.category for entry in entries if entry.category)

    # most_common keeps first-seen order on ties
    top_category = categories.most_common(1)[0][0] if categories else None

    return EntrySummary(
        count=len(entries),
        average_level=sum(levels) / len(levels),
        min_level=min(levels),
        max_level=max(levels),
        top_category=top_category,
        category_counts=dict(categories),
    )
