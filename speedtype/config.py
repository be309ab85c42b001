from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .app import DEFAULT_DURATION, DURATIONS

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).resolve().parent / "speedtype.config.json"
DEFAULT_LANGUAGE = "english"
DEFAULT_THEME = "slate"

THEMES: Dict[str, Dict[str, str]] = {
    "slate": {
        "screen_bg": "transparent",
        "stats_bg": "#0f172a",
        "prompt_bg": "#0b1220",
        "border": "#1f2937",
        "title": "#e5e7eb",
        "muted": "#64748b",
        "hint": "#93c5fd",
        "ok": "#a7f3d0",
        "bad": "#fca5a5",
        "bad_bg": "#3f1d2a",
        "upcoming": "#cbd5e1",
        "cursor": "#e5e7eb",
        "bar_fg": "#60a5fa",
        "bar_bg": "#1e293b",
    },
    "ember": {
        "screen_bg": "transparent",
        "stats_bg": "#21140e",
        "prompt_bg": "#1a1210",
        "border": "#3b1d14",
        "title": "#fef3c7",
        "muted": "#d6a08a",
        "hint": "#fbbf24",
        "ok": "#fcd34d",
        "bad": "#f87171",
        "bad_bg": "#3d0f12",
        "upcoming": "#f3e8e1",
        "cursor": "#fde68a",
        "bar_fg": "#f97316",
        "bar_bg": "#3b1d14",
    },
    "mint": {
        "screen_bg": "transparent",
        "stats_bg": "#0b1c22",
        "prompt_bg": "#0a1b1f",
        "border": "#12323a",
        "title": "#d1fae5",
        "muted": "#7dd3c7",
        "hint": "#5eead4",
        "ok": "#a7f3d0",
        "bad": "#fb7185",
        "bad_bg": "#0f2f2a",
        "upcoming": "#c7f9f1",
        "cursor": "#d1fae5",
        "bar_fg": "#34d399",
        "bar_bg": "#12323a",
    },
}


@dataclass
class Settings:
    duration: int = DEFAULT_DURATION
    language: str = DEFAULT_LANGUAGE
    theme: str = DEFAULT_THEME
    text: Optional[str] = None
    themes: Dict[str, Dict[str, str]] = field(default_factory=lambda: dict(THEMES))

    @property
    def theme_names(self) -> List[str]:
        return list(self.themes.keys())


def load_config(path: Path = CONFIG_PATH) -> Dict[str, object]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning(f"Ignoring unreadable config {path}: {exc}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {path}: expected a JSON object")
        return {}
    return data


def load_settings(path: Path = CONFIG_PATH) -> Settings:
    config = load_config(path)
    settings = Settings()

    extra_themes = config.get("themes")
    if isinstance(extra_themes, dict):
        for name, colors in extra_themes.items():
            if isinstance(colors, dict):
                settings.themes[name] = {**THEMES[DEFAULT_THEME], **colors}

    theme = str(config.get("theme", DEFAULT_THEME))
    if theme not in settings.themes:
        logger.warning(f"Unknown theme '{theme}', using '{DEFAULT_THEME}'")
        theme = DEFAULT_THEME
    settings.theme = theme

    try:
        duration = int(config.get("duration_sec", DEFAULT_DURATION))
    except (TypeError, ValueError):
        duration = DEFAULT_DURATION
    if duration not in DURATIONS:
        logger.warning(f"Unsupported duration {duration}s, using {DEFAULT_DURATION}s")
        duration = DEFAULT_DURATION
    settings.duration = duration

    language = config.get("language", DEFAULT_LANGUAGE)
    if isinstance(language, str) and language:
        settings.language = language

    text = config.get("text")
    if isinstance(text, str) and text.strip():
        settings.text = text.strip()

    return settings
