"""Tile click strategy for live TV sites that present channels as a shelf of tiles.

The channel selector is a fragment of the tile image URL (for example
``poster_linear_espn_none``). The tile is located through its image, clicked,
and when the profile names a ``play_selector`` the play button shown in the
resulting modal is clicked too, verifying each click by waiting for the button
to go away.
"""

from __future__ import annotations

import logging

from playwright.async_api import Error as PlaywrightError, Page, TimeoutError as PlaywrightTimeoutError

from ..browser.primitives import scroll_and_click
from ..browser.queries import ELEMENT_TARGET, TILE_TARGET
from ..errors import BrowserError
from ..types import ProviderProfile, SelectorResult
from .base import ChannelStrategy, ProviderCache

logger = logging.getLogger(__name__)

# Coordinate clicks on animated single page apps sometimes miss; retry with fresh coordinates.
MAX_PLAY_CLICK_ATTEMPTS = 3

# How long the play button gets to disappear after a click before the click counts as missed.
PLAY_CLICK_VERIFY_TIMEOUT_MS = 3000


class TileClickStrategy(ChannelStrategy):
    name = "tileClick"
    uses_image_slug = True

    def __init__(self, confirm_timeout_ms: int = 10000) -> None:
        self._confirm_timeout_ms = confirm_timeout_ms

    async def select(self, page: Page, profile: ProviderProfile, cache: ProviderCache) -> SelectorResult:
        slug = profile.channel_selector or ""

        tile = await TILE_TARGET.locate(page, slug)
        if tile is None:
            return SelectorResult.failed("Channel tile not found in page images.")

        # Opens the play modal, or starts playback directly on auto-playing sites.
        await scroll_and_click(page, tile)

        if not profile.play_selector:
            return SelectorResult.ok()

        return await self.confirm(page, profile.play_selector)

    async def confirm(self, page: Page, play_selector: str) -> SelectorResult:
        try:
            await page.wait_for_selector(play_selector, state="attached", timeout=self._confirm_timeout_ms)
        except PlaywrightTimeoutError:
            return SelectorResult.failed("Play button did not appear after clicking channel tile.")
        except PlaywrightError as exc:
            raise BrowserError(f"Waiting for play button {play_selector!r} failed: {exc}") from exc

        for attempt in range(MAX_PLAY_CLICK_ATTEMPTS):
            target = await ELEMENT_TARGET.locate(page, play_selector)

            if target is None:
                if attempt > 0:
                    # Approximation: the button vanishing after a click is taken as the
                    # player transition, though it may have been removed for another reason.
                    logger.debug(
                        "Play button disappeared before attempt %s. Previous click likely succeeded.",
                        attempt + 1,
                    )
                    return SelectorResult.ok()
                return SelectorResult.failed("Play button found but has no dimensions.")

            await scroll_and_click(page, target)

            if await self._wait_hidden(page, play_selector):
                return SelectorResult.ok()

            if attempt < MAX_PLAY_CLICK_ATTEMPTS - 1:
                logger.info(
                    "Play button click attempt %s of %s did not dismiss the modal. Retrying with fresh coordinates.",
                    attempt + 1,
                    MAX_PLAY_CLICK_ATTEMPTS,
                    extra={"attempt": attempt + 1, "selector": play_selector},
                )

        return SelectorResult.failed(
            f"Play button click did not dismiss the modal after {MAX_PLAY_CLICK_ATTEMPTS} attempts."
        )

    async def _wait_hidden(self, page: Page, selector: str) -> bool:
        try:
            await page.wait_for_selector(selector, state="hidden", timeout=PLAY_CLICK_VERIFY_TIMEOUT_MS)
        except PlaywrightTimeoutError:
            return False
        except PlaywrightError:
            logger.debug("Play button visibility check failed", exc_info=True)
            return False
        return True
