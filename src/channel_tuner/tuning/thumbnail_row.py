from __future__ import annotations

import logging

from playwright.async_api import Page

from ..browser.primitives import normalize_channel_name, scroll_and_click
from ..browser.queries import IMAGE_BY_LABEL, IMAGE_LABELS, IMAGE_TARGET
from ..diagnostics import log_available_channels
from ..types import ClickTarget, ProviderProfile, SelectorResult
from .base import ChannelStrategy, ProviderCache

logger = logging.getLogger(__name__)

_REPORTED_URLS = "reported_urls"


class ThumbnailRowStrategy(ChannelStrategy):
    """Clicks the channel thumbnail itself in a row of channel logos.

    The selector is matched against image URLs first, then against the
    thumbnails' alt text so a display name works as well as a slug.
    """

    name = "thumbnailRow"
    uses_image_slug = True

    async def select(self, page: Page, profile: ProviderProfile, cache: ProviderCache) -> SelectorResult:
        slug = profile.channel_selector or ""

        target = await IMAGE_TARGET.locate(page, slug)
        if target is None:
            names = await IMAGE_LABELS.collect(page, None)
            target = await self._locate_by_label(page, slug, names)
            if target is None:
                self._report_available(page.url, profile, names, cache)
                return SelectorResult.failed("Channel thumbnail not found in page images.")

        await scroll_and_click(page, target)
        return SelectorResult.ok()

    async def _locate_by_label(self, page: Page, selector: str, names: list[str]) -> ClickTarget | None:
        wanted = normalize_channel_name(selector)
        for name in names:
            if normalize_channel_name(name) == wanted:
                logger.debug("Matched thumbnail %r by alt text", name)
                return await IMAGE_BY_LABEL.locate(page, name)
        return None

    def _report_available(self, url: str, profile: ProviderProfile, names: list[str], cache: ProviderCache) -> None:
        reported: set[str] = cache.get(_REPORTED_URLS) or set()
        if url in reported:
            logger.debug("Available channels for %s already reported this session", url)
            return

        reported.add(url)
        cache.set(_REPORTED_URLS, reported)
        log_available_channels(
            names,
            channel_name=profile.channel_selector or "",
            guide_url=url,
            provider_name=profile.name or "thumbnail row",
        )
