from __future__ import annotations

from .base import ChannelStrategy, ProviderCache, SelectionState
from .registry import StrategyRegistry, default_registry
from .thumbnail_row import ThumbnailRowStrategy
from .tile_click import MAX_PLAY_CLICK_ATTEMPTS, TileClickStrategy

__all__ = [
	"ChannelStrategy",
	"ProviderCache",
	"SelectionState",
	"StrategyRegistry",
	"default_registry",
	"ThumbnailRowStrategy",
	"TileClickStrategy",
	"MAX_PLAY_CLICK_ATTEMPTS",
]
