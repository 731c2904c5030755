from __future__ import annotations

from .config import Settings
from .diagnostics import log_available_channels
from .selection import ChannelSelector
from .types import ClickTarget, ProviderProfile, SelectorResult, load_profile

__all__ = [
	"ChannelSelector",
	"ClickTarget",
	"ProviderProfile",
	"SelectorResult",
	"Settings",
	"load_profile",
	"log_available_channels",
]
