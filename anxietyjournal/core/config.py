"""
Configuration management for AnxietyJournal.

Loads settings from environment variables and an optional JSON settings file.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, List

from dotenv import find_dotenv, load_dotenv

DEFAULT_TRIGGER_CATEGORIES = [
    "Work",
    "Relationships",
    "Health",
    "Environment",
    "Other",
]


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Application configuration."""

    # Database
    database_path: str = "data/anxietyjournal.db"

    # Single key holding the whole entry collection
    storage_key: str = "anxiety_entries"

    # Write a bare JSON array instead of the versioned envelope
    legacy_format: bool = False

    # Optional JSON settings file
    settings_path: Optional[str] = None

    # Trigger categories offered by the CLI (store accepts any string)
    trigger_categories: List[str] = field(
        default_factory=lambda: list(DEFAULT_TRIGGER_CATEGORIES)
    )

    # Number of most recent entries in the trend series
    chart_window: int = 7

    # Timezone used for displaying entry dates
    timezone: str = "UTC"

    # Logging
    log_level: str = "INFO"

    @classmethod
    def _load_json(cls, json_path: Path) -> Dict[str, Any]:
        """Load JSON settings file."""
        if not json_path.exists():
            raise FileNotFoundError(f"Settings file not found: {json_path}")

        with open(json_path, 'r') as f:
            return json.load(f)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from .env, environment variables and settings JSON."""
        load_dotenv(find_dotenv(usecwd=True))

        settings_path = os.getenv("ANXIETYJOURNAL_SETTINGS")
        settings_data: Dict[str, Any] = {}
        if settings_path:
            settings_data = cls._load_json(Path(settings_path))

        config = cls(
            database_path=os.getenv("ANXIETYJOURNAL_DB_PATH", "data/anxietyjournal.db"),
            storage_key=os.getenv("ANXIETYJOURNAL_STORAGE_KEY", "anxiety_entries"),
            legacy_format=_env_flag("ANXIETYJOURNAL_LEGACY_FORMAT"),
            settings_path=settings_path,

            # From settings JSON
            trigger_categories=list(
                settings_data.get("trigger_categories", DEFAULT_TRIGGER_CATEGORIES)
            ),
            chart_window=int(settings_data.get("chart_window", 7)),

            timezone=os.getenv("TIMEZONE", "UTC"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

        return config

    def get_summary(self) -> str:
        """Get a summary of current settings."""
        return f"""Database: {self.database_path}
Storage Key: {self.storage_key}
Format: {"legacy array" if self.legacy_format else "versioned envelope"}
Settings File: {self.settings_path or "none"}

Trigger Categories: {", ".join(self.trigger_categories)}
Chart Window: {self.chart_window} entries
Timezone: {self.timezone}
Log Level: {self.log_level}
"""
