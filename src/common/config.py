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
POSTS_DIR = PROJECT_ROOT / "source" / "_posts"
PUBLIC_DIR = PROJECT_ROOT / "public"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class RendererSettings(BaseModel):
    """Settings for the markdown content renderer."""
    source_dir: str = str(POSTS_DIR)
    break_marker: str = "<!-- more -->"
    markdown_extensions: list[str] = Field(
        default_factory=lambda: ["tables", "fenced_code"]
    )
    suffixes: list[str] = Field(default_factory=lambda: [".md", ".markdown"])
    default_layout: str = "post"


class SiteSettings(BaseModel):
    """Settings for the generated static site."""
    title: str = "Notes"
    author: str = ""
    base_url: str = "http://localhost"
    output_dir: str = str(PUBLIC_DIR)
    feed_limit: int = Field(default=20, ge=1)


class Settings(BaseModel):
    """Top-level application settings."""
    renderer: RendererSettings = Field(default_factory=RendererSettings)
    site: SiteSettings = Field(default_factory=SiteSettings)

    @classmethod
    def load(cls, settings_path: Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        Environment variables override values from the file.
        """
        settings_path = settings_path or CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        settings = cls(**data)
        settings.apply_env()
        return settings

    def apply_env(self) -> None:
        """Apply BLOG_* environment overrides in place."""
        if source := os.getenv("BLOG_SOURCE_DIR"):
            self.renderer.source_dir = source
        if (marker := os.getenv("BLOG_BREAK_MARKER")) is not None:
            self.renderer.break_marker = marker
        if output := os.getenv("BLOG_OUTPUT_DIR"):
            self.site.output_dir = output
        if base_url := os.getenv("BLOG_BASE_URL"):
            self.site.base_url = base_url


# Singleton settings instance
settings = Settings.load()
