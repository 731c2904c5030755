from __future__ import annotations

import abc
from typing import Any, ClassVar, Iterator

from playwright.async_api import Page

from ..types import ProviderProfile, SelectorResult


class ProviderCache:
    """Short-lived facts one strategy discovered about a provider's page layout."""

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def reset(self) -> None:
        self._entries.clear()


class SelectionState:
    """Per-browser-session caches, one per strategy, reset together."""

    def __init__(self) -> None:
        self._caches: dict[str, ProviderCache] = {}

    def cache_for(self, strategy_name: str) -> ProviderCache:
        cache = self._caches.get(strategy_name)
        if cache is None:
            cache = ProviderCache()
            self._caches[strategy_name] = cache
        return cache

    def reset(self) -> None:
        for cache in self._caches.values():
            cache.reset()


class ChannelStrategy(abc.ABC):
    """Provider-family specific locate/click/confirm implementation."""

    name: ClassVar[str]
    # Whether the channel selector is an image URL fragment the coordinator can wait on.
    uses_image_slug: ClassVar[bool] = True

    @abc.abstractmethod
    async def select(self, page: Page, profile: ProviderProfile, cache: ProviderCache) -> SelectorResult:
        """Tune ``page`` to the channel named by ``profile.channel_selector``."""
