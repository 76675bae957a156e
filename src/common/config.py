"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class ApiSettings(BaseModel):
    """Settings for the deal backend REST API."""
    base_url: str = Field(
        default_factory=lambda: os.getenv("KBFOOD_API_URL", "http://localhost:9000/api")
    )
    timeout_seconds: float = 10.0
    max_retries: int = 3
    user_key: str = Field(default_factory=lambda: os.getenv("BARK_KEY", ""))


class PresetSettings(BaseModel):
    """A discount shortcut shown next to the target price input."""
    label: str
    discount: Decimal


class AlertSettings(BaseModel):
    """Business rules for price-drop alert targets."""
    slider_min: int = 10
    slider_max: int = 95
    min_target_ratio: Decimal = Decimal("0.1")
    preset_tolerance: Decimal = Decimal("0.01")
    presets: list[PresetSettings] = Field(
        default_factory=lambda: [
            PresetSettings(label="9折", discount=Decimal("0.1")),
            PresetSettings(label="8折", discount=Decimal("0.2")),
            PresetSettings(label="7折", discount=Decimal("0.3")),
            PresetSettings(label="半价", discount=Decimal("0.5")),
        ]
    )


class Settings(BaseModel):
    """Top-level application settings."""
    api: ApiSettings = Field(default_factory=ApiSettings)
    alert: AlertSettings = Field(default_factory=AlertSettings)
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @classmethod
    def load(cls, path: str | Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults."""
        settings_path = Path(path) if path else CONFIG_DIR / "settings.yaml"
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        return cls()


# Singleton settings instance
settings = Settings.load()
