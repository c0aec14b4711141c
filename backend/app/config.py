"""Runtime settings read from the environment (and backend/.env)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from models import DEFAULT_BALL_COUNT, DEFAULT_SLOT_COLORS

# Load .env from backend dir (where server.py runs)
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))

logger = logging.getLogger(__name__)


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("[config] %s=%r is not an integer; using %d", name, raw, default)
        return default


def _colors_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(name, "").strip()
    colors = tuple(c.strip() for c in raw.split(",") if c.strip())
    if not colors:
        return default
    if len(set(colors)) != len(colors):
        logger.warning("[config] %s has duplicate colors %r; using %r", name, colors, default)
        return default
    return colors


@dataclass(frozen=True)
class Settings:
    broadcast_interval_ms: int = 500
    # Palette length is the game capacity.
    slot_colors: tuple[str, ...] = field(default=DEFAULT_SLOT_COLORS)
    ball_count: int = DEFAULT_BALL_COUNT
    outbox_size: int = 256
    index_html: str = "index.html"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    @property
    def max_players(self) -> int:
        return len(self.slot_colors)

    @property
    def broadcast_interval(self) -> float:
        return self.broadcast_interval_ms / 1000.0

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            broadcast_interval_ms=max(1, _int_env("BROADCAST_INTERVAL_MS", 500)),
            slot_colors=_colors_env("GAME_COLORS", DEFAULT_SLOT_COLORS),
            ball_count=_int_env("GAME_BALLS", DEFAULT_BALL_COUNT),
            outbox_size=max(1, _int_env("OUTBOX_SIZE", 256)),
            index_html=os.environ.get("INDEX_HTML", "").strip() or "index.html",
            host=os.environ.get("HOST", "").strip() or "0.0.0.0",
            port=_int_env("PORT", 8080),
            log_level=os.environ.get("LOG_LEVEL", "").strip().upper() or "INFO",
        )
