"""Strategy dispatch table keyed by strategy identifier."""

from __future__ import annotations

import logging
from typing import Iterator

from ..config import Settings
from ..errors import ConfigurationError
from .base import ChannelStrategy
from .thumbnail_row import ThumbnailRowStrategy
from .tile_click import TileClickStrategy

logger = logging.getLogger(__name__)


class StrategyRegistry:
    """Registry of channel selection strategies."""

    def __init__(self) -> None:
        self._strategies: dict[str, ChannelStrategy] = {}

    def register(self, strategy: ChannelStrategy) -> None:
        """Register a strategy under its ``name``."""
        if strategy.name in self._strategies:
            raise ConfigurationError(f"Strategy {strategy.name!r} is already registered")
        self._strategies[strategy.name] = strategy
        logger.debug("Registered channel selection strategy %s", strategy.name)

    def get(self, name: str) -> ChannelStrategy | None:
        return self._strategies.get(name)

    def has(self, name: str) -> bool:
        return name in self._strategies

    def names(self) -> list[str]:
        return sorted(self._strategies)

    def __iter__(self) -> Iterator[ChannelStrategy]:
        return iter([self._strategies[name] for name in self.names()])

    def __len__(self) -> int:
        return len(self._strategies)


def default_registry(settings: Settings | None = None) -> StrategyRegistry:
    """Registry holding every built-in strategy."""
    settings = settings or Settings()
    registry = StrategyRegistry()
    registry.register(ThumbnailRowStrategy())
    registry.register(TileClickStrategy(confirm_timeout_ms=settings.video_timeout_ms))
    return registry
