"""Typed queries executed against the live document.

Each query is a self-contained JavaScript function plus a decoder for its
serialisable result, so the evaluation boundary has a fixed contract that the
tests can fake without a browser.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from playwright.async_api import Error as PlaywrightError, Page

from ..errors import BrowserError
from ..types import ClickTarget

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TargetQuery:
    """Query whose result is a click target or ``null``."""

    name: str
    script: str

    async def locate(self, page: Page, arg: Any) -> ClickTarget | None:
        try:
            raw = await page.evaluate(self.script, arg)
        except PlaywrightError as exc:
            raise BrowserError(f"{self.name} evaluation failed: {exc}") from exc
        target = ClickTarget.from_payload(raw)
        logger.debug("%s(%r) -> %s", self.name, arg, target)
        return target


@dataclass(frozen=True, slots=True)
class ListQuery:
    """Query whose result is a list of strings."""

    name: str
    script: str

    async def collect(self, page: Page, arg: Any) -> list[str]:
        try:
            raw = await page.evaluate(self.script, arg)
        except PlaywrightError as exc:
            raise BrowserError(f"{self.name} evaluation failed: {exc}") from exc
        if not isinstance(raw, list):
            return []
        return [str(item) for item in raw if isinstance(item, str) and item.strip()]


# Predicate for page.wait_for_function: an image with the slug in its src that
# the browser has fetched and decoded.
IMAGE_READY_PREDICATE = """
(slug) => Array.from(document.querySelectorAll('img')).some(
    (img) => img.src && img.src.includes(slug) && img.complete && img.naturalWidth > 0
)
"""


TILE_TARGET = TargetQuery(
    name="tile_target",
    script="""
(slug) => {
    const center = (el) => {
        el.scrollIntoView({ behavior: 'instant', block: 'center', inline: 'center' });
        const rect = el.getBoundingClientRect();
        if (rect.width > 0 && rect.height > 0) {
            return { x: rect.x + rect.width / 2, y: rect.y + rect.height / 2 };
        }
        return null;
    };
    for (const img of Array.from(document.querySelectorAll('img'))) {
        if (!img.src.includes(slug)) {
            continue;
        }
        const imgRect = img.getBoundingClientRect();
        if (imgRect.width <= 0 || imgRect.height <= 0) {
            continue;
        }
        let ancestor = img.parentElement;
        let pointerFallback = null;
        while (ancestor && ancestor !== document.body) {
            const tag = ancestor.tagName;
            if (tag === 'A' || tag === 'BUTTON' || ancestor.getAttribute('role') === 'button' || ancestor.hasAttribute('onclick')) {
                const target = center(ancestor);
                if (target) {
                    return target;
                }
            }
            if (!pointerFallback) {
                const rect = ancestor.getBoundingClientRect();
                if (rect.width > 20 && rect.height > 20 && window.getComputedStyle(ancestor).cursor === 'pointer') {
                    pointerFallback = ancestor;
                }
            }
            ancestor = ancestor.parentElement;
        }
        if (pointerFallback) {
            const target = center(pointerFallback);
            if (target) {
                return target;
            }
        }
    }
    return null;
}
""",
)


ELEMENT_TARGET = TargetQuery(
    name="element_target",
    script="""
(selector) => {
    const el = document.querySelector(selector);
    if (!el) {
        return null;
    }
    el.scrollIntoView({ behavior: 'instant', block: 'center', inline: 'center' });
    const rect = el.getBoundingClientRect();
    if (rect.width > 0 && rect.height > 0) {
        return { x: rect.x + rect.width / 2, y: rect.y + rect.height / 2 };
    }
    return null;
}
""",
)


IMAGE_TARGET = TargetQuery(
    name="image_target",
    script="""
(slug) => {
    for (const img of Array.from(document.querySelectorAll('img'))) {
        if (!img.src.includes(slug)) {
            continue;
        }
        img.scrollIntoView({ behavior: 'instant', block: 'center', inline: 'center' });
        const rect = img.getBoundingClientRect();
        if (rect.width > 0 && rect.height > 0) {
            return { x: rect.x + rect.width / 2, y: rect.y + rect.height / 2 };
        }
    }
    return null;
}
""",
)


IMAGE_LABELS = ListQuery(
    name="image_labels",
    script="""
() => {
    const names = new Set();
    for (const img of Array.from(document.querySelectorAll('img'))) {
        const label = (img.getAttribute('alt') || img.getAttribute('aria-label') || '').trim();
        if (label) {
            names.add(label);
        }
    }
    return Array.from(names).sort();
}
""",
)


IMAGE_BY_LABEL = TargetQuery(
    name="image_by_label",
    script="""
(label) => {
    for (const img of Array.from(document.querySelectorAll('img'))) {
        const current = (img.getAttribute('alt') || img.getAttribute('aria-label') || '').trim();
        if (current !== label) {
            continue;
        }
        img.scrollIntoView({ behavior: 'instant', block: 'center', inline: 'center' });
        const rect = img.getBoundingClientRect();
        if (rect.width > 0 && rect.height > 0) {
            return { x: rect.x + rect.width / 2, y: rect.y + rect.height / 2 };
        }
    }
    return null;
}
""",
)
