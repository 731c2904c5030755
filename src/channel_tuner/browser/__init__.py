from __future__ import annotations

from .primitives import normalize_channel_name, scroll_and_click
from .queries import (
    ELEMENT_TARGET,
    IMAGE_BY_LABEL,
    IMAGE_LABELS,
    IMAGE_READY_PREDICATE,
    IMAGE_TARGET,
    TILE_TARGET,
    ListQuery,
    TargetQuery,
)
from .session import BrowserSession

__all__ = [
	"BrowserSession",
	"TargetQuery",
	"ListQuery",
	"TILE_TARGET",
	"ELEMENT_TARGET",
	"IMAGE_TARGET",
	"IMAGE_LABELS",
	"IMAGE_BY_LABEL",
	"IMAGE_READY_PREDICATE",
	"scroll_and_click",
	"normalize_channel_name",
]
