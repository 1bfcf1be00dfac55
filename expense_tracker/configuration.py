"""Mini README: Centralised configuration models and helpers for the tracker.

Structure:
    * ExpenseTrackerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read ``EXPENSE_TRACKER_*`` environment
    variables (or a local ``.env`` file), locate the ledger file, and pick the
    dashboard host and port. The configuration is cached so validation runs
    once per process; tests build ``ExpenseTrackerSettings`` directly instead.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CATEGORIES = [
    "Food",
    "Transportation",
    "Utilities",
    "Entertainment",
    "Shopping",
    "Other",
]


class ExpenseTrackerSettings(BaseSettings):
    """Runtime configuration for the expense tracker."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        "development",
        description=(
            "Environment label. Any value other than \"production\" runs the"
            " dashboard with auto-reload unless the launcher overrides it."
        ),
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted expense ledger.",
    )
    ledger_filename: str = Field(
        "expenses.json",
        description="File name of the JSON ledger inside the data directory.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the dashboard to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the dashboard listens on.",
        ge=1,
        le=65535,
    )
    currency_symbol: str = Field(
        "₹",
        description="Symbol prefixed to amounts on the dashboard.",
    )
    categories: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CATEGORIES),
        description=(
            "Categories offered by the entry form. The ledger accepts any"
            " label, so removing one here does not hide existing expenses."
        ),
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level applied by the launcher.",
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value if value is not None else "data").expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("categories")
    @classmethod
    def _strip_categories(cls, value: List[str]) -> List[str]:
        """Drop blank entries and surrounding whitespace from category labels."""

        cleaned = [label.strip() for label in value if label and label.strip()]
        if not cleaned:
            raise ValueError("At least one expense category must be configured.")
        return cleaned

    @property
    def auto_reload(self) -> bool:
        """Whether the launcher should restart the server on code changes."""

        return self.environment.strip().lower() != "production"

    @property
    def ledger_path(self) -> Path:
        """Full path of the persisted JSON ledger."""

        return self.data_directory / self.ledger_filename


@lru_cache()
def get_settings() -> ExpenseTrackerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return ExpenseTrackerSettings()
