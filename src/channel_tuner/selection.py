"""Channel selection coordinator for multi-channel streaming sites.

Sites such as USA Network or YouTube TV put several channels on one page and
expect the viewer to pick one from a shelf or a guide. The coordinator decides
whether a profile needs selection at all, waits for the channel image when the
strategy keys off image URLs, and hands the page to the strategy registered
under the profile's strategy identifier.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from playwright.async_api import Error as PlaywrightError, Page

from .browser.queries import IMAGE_READY_PREDICATE
from .config import Settings
from .diagnostics import log_available_channels
from .errors import BrowserError
from .logging import reset_tune_context, set_tune_context
from .presets import ChannelPreset
from .tuning.base import SelectionState
from .tuning.registry import StrategyRegistry, default_registry
from .types import ProviderProfile, SelectorResult

logger = logging.getLogger(__name__)

# Strategies whose selector is a station code, a display name, or an image hidden behind a tab.
SKIP_IMAGE_POLLING = frozenset({"foxGrid", "guideGrid", "hboGrid", "slingGrid", "youtubeGrid"})

UNKNOWN_STRATEGY_REASON = "Unknown channel selection strategy."


class ChannelSelector:
    """Dispatches channel selection to per-provider strategies."""

    def __init__(
        self,
        settings: Settings | None = None,
        registry: StrategyRegistry | None = None,
        state: SelectionState | None = None,
        presets: Mapping[str, ChannelPreset] | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._registry = registry if registry is not None else default_registry(self._settings)
        self._state = state or SelectionState()
        self._presets = presets

    @property
    def registry(self) -> StrategyRegistry:
        return self._registry

    @property
    def state(self) -> SelectionState:
        return self._state

    async def select_channel(self, page: Page, profile: ProviderProfile) -> SelectorResult:
        if not profile.needs_selection:
            return SelectorResult.ok()

        strategy = self._registry.get(profile.strategy)

        if self._should_poll_image(profile.strategy):
            await self._wait_for_channel_image(page, profile.channel_selector or "")

        if strategy is None:
            logger.warning("Unknown channel selection strategy: %s.", profile.strategy)
            return SelectorResult.failed(UNKNOWN_STRATEGY_REASON)

        token = set_tune_context(strategy=profile.strategy, channel=profile.label())
        try:
            result = await strategy.select(page, profile, self._state.cache_for(strategy.name))
        except BrowserError as exc:
            logger.warning("Channel selection for %s aborted: %s", profile.label(), exc)
            result = SelectorResult.failed(str(exc))
        finally:
            reset_tune_context(token)

        if result.success:
            logger.debug("Selected channel %s with %s", profile.label(), profile.strategy)
        else:
            logger.info("Channel selection for %s failed: %s", profile.label(), result.reason)
        return result

    def clear_all_caches(self) -> None:
        """Drop every provider cache. Called when the browser session restarts."""

        self._state.reset()

    def log_available_channels(
        self,
        available_channels: Sequence[str],
        channel_name: str,
        guide_url: str,
        provider_name: str,
        preset_suffix: str | None = None,
        additional_known_names: Sequence[str] | None = None,
    ) -> None:
        log_available_channels(
            available_channels,
            channel_name=channel_name,
            guide_url=guide_url,
            provider_name=provider_name,
            preset_suffix=preset_suffix,
            additional_known_names=additional_known_names,
            presets=self._presets,
        )

    def _should_poll_image(self, strategy_name: str) -> bool:
        if strategy_name in SKIP_IMAGE_POLLING:
            return False
        strategy = self._registry.get(strategy_name)
        return strategy is None or strategy.uses_image_slug

    async def _wait_for_channel_image(self, page: Page, slug: str) -> None:
        try:
            await page.wait_for_function(
                IMAGE_READY_PREDICATE,
                arg=slug,
                timeout=self._settings.channel_selector_delay_ms,
            )
        except PlaywrightError:
            # Not fatal; the strategy reports not-found on its own.
            logger.debug("Channel image %s not ready after %sms", slug, self._settings.channel_selector_delay_ms)
