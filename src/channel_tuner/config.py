from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv()


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(slots=True)
class Settings:
    """Tuning configuration loaded from environment variables."""

    # How long to wait for the channel slug image to load before dispatching.
    channel_selector_delay_ms: int = 3000
    # How long to wait for a confirmation element after clicking a tile.
    video_timeout_ms: int = 10000
    headless_default: bool = True
    log_level: str = "INFO"
    log_dir: Path = Path("logs")

    def __post_init__(self) -> None:
        if self.channel_selector_delay_ms <= 0:
            raise ConfigurationError("channel_selector_delay_ms must be positive")
        if self.video_timeout_ms <= 0:
            raise ConfigurationError("video_timeout_ms must be positive")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            channel_selector_delay_ms=_int_env("CHANNEL_SELECTOR_DELAY_MS", 3000),
            video_timeout_ms=_int_env("VIDEO_TIMEOUT_MS", 10000),
            headless_default=_bool_env("HEADLESS_DEFAULT", True),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=Path(os.getenv("LOG_DIR", "logs")),
        )

    def ensure_directories(self) -> None:
        self.log_dir.mkdir(parents=True, exist_ok=True)
