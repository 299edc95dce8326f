"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class ScraperSettings(BaseModel):
    """Settings for the product page collector."""
    request_timeout: int = 20
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/121.0.0.0 Safari/537.36"
    )


class LLMSettings(BaseModel):
    """Generative text service settings."""
    provider: str = "openai"
    openai_model: str = "gpt-4o-mini"
    anthropic_model: str = "claude-sonnet-4-5-20250929"
    max_tokens: int = 8192
    temperature: float = 0.6


class ImageSettings(BaseModel):
    """Image rendering service settings (Gemini image model)."""
    model: str = "gemini-2.5-flash-image"
    endpoint: str = "https://generativelanguage.googleapis.com/v1beta/models"
    max_concurrency: int = Field(default=2, ge=1)
    timeout_seconds: float = 120.0


class SpellcheckSettings(BaseModel):
    """Spell-check service settings (LanguageTool)."""
    api_url: str = "https://api.languagetool.org/v2/check"
    timeout_seconds: float = 30.0


class Settings(BaseModel):
    """Top-level application settings."""
    scraper: ScraperSettings = Field(default_factory=ScraperSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    images: ImageSettings = Field(default_factory=ImageSettings)
    spellcheck: SpellcheckSettings = Field(default_factory=SpellcheckSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        Environment overrides are applied after the file is read.
        """
        settings_path = path or CONFIG_DIR / "settings.yaml"
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            settings = cls(**data)
        else:
            settings = cls()
        settings._apply_env_overrides()
        return settings

    def _apply_env_overrides(self) -> None:
        if model := os.getenv("OPENAI_MODEL"):
            self.llm.openai_model = model
        if provider := os.getenv("LLM_PROVIDER"):
            self.llm.provider = provider
        if model := os.getenv("IMAGE_MODEL"):
            self.images.model = model
        if url := os.getenv("LANGUAGETOOL_API_URL"):
            self.spellcheck.api_url = url


def get_openai_api_key() -> str:
    """Get OpenAI API key from environment."""
    key = os.getenv("OPENAI_API_KEY", "")
    if not key:
        raise ValueError("OPENAI_API_KEY not set in environment")
    return key


def get_anthropic_api_key() -> str:
    """Get Anthropic API key from environment."""
    key = os.getenv("ANTHROPIC_API_KEY", "")
    if not key:
        raise ValueError("ANTHROPIC_API_KEY not set in environment")
    return key


def get_image_api_key() -> str:
    """Get the image service key, or an empty string when not configured."""
    return os.getenv("NANO_BANANA_API_KEY") or os.getenv("GOOGLE_API_KEY", "")


# Singleton settings instance
settings = Settings.load()
