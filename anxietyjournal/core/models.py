"""
Data models for AnxietyJournal.

Models: KeyValue (database row), AnxietyEntry, NewEntry, QuickLevel.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Union

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

Level = Union[int, float]


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class KeyValue(Base):
    """
    A single key-value record.

    The entry collection lives in one row of this table,
    serialized as JSON under a fixed key.
    """

    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(200), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<KeyValue {self.key}: {len(self.value)} chars>"


@dataclass(frozen=True)
class AnxietyEntry:
    """
    One recorded anxiety entry.

    Created only by the entry store, never mutated afterwards.
    """

    id: str
    level: Level
    category: str
    notes: str
    timestamp: int  # milliseconds since epoch

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "level": self.level,
            "category": self.category,
            "notes": self.notes,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnxietyEntry":
        """
        Create from a stored dictionary.

        Raises:
            ValueError: if a required field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"Entry must be an object, got {type(data).__name__}")

        for name in ("id", "level", "timestamp"):
            if name not in data:
                raise ValueError(f"Entry is missing field: {name}")

        level = data["level"]
        timestamp = data["timestamp"]

        # bool is an int subclass, reject it explicitly
        if isinstance(level, bool) or not isinstance(level, (int, float)):
            raise ValueError(f"Entry level is not a number: {level!r}")
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise ValueError(f"Entry timestamp is not a number: {timestamp!r}")

        return cls(
            id=str(data["id"]),
            level=level,
            category=str(data.get("category") or ""),
            notes=str(data.get("notes") or ""),
            timestamp=int(timestamp),
        )


@dataclass(frozen=True)
class NewEntry:
    """User-supplied part of an entry. The store assigns id and timestamp."""

    level: Level
    category: str = ""
    notes: str = ""


@dataclass(frozen=True)
class QuickLevel:
    """Preset anxiety level offered as a shortcut."""

    value: Level
    label: str


QUICK_LEVELS: List[QuickLevel] = [
    QuickLevel(0, "None"),
    QuickLevel(1, "Mild"),
    QuickLevel(2.5, "Moderate"),
    QuickLevel(4, "High"),
    QuickLevel(5, "Extreme"),
]

MIN_LEVEL = 0
MAX_LEVEL = 5
