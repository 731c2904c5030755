from __future__ import annotations

import asyncio
import re

from playwright.async_api import Error as PlaywrightError, Page

from ..errors import BrowserError
from ..types import ClickTarget

# Lets scroll animations and lazy-loaded content settle before a click fires.
CLICK_SETTLE_DELAY_S = 0.2

_WHITESPACE = re.compile(r"\s+")


async def scroll_and_click(page: Page, target: ClickTarget) -> bool:
    """Click ``target`` after a short settle delay.

    The caller scrolls the element into view first. The return value only
    says the click was issued, not that it had the intended effect.
    """

    await asyncio.sleep(CLICK_SETTLE_DELAY_S)
    try:
        await page.mouse.click(target.x, target.y)
    except PlaywrightError as exc:
        raise BrowserError(f"Click at ({target.x:.0f}, {target.y:.0f}) failed: {exc}") from exc
    return True


def normalize_channel_name(name: str) -> str:
    """Trim, collapse any whitespace run (NBSP and tabs included) to one space, lowercase."""

    return _WHITESPACE.sub(" ", name.strip()).lower()
