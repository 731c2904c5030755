from __future__ import annotations

import logging

import pytest
from playwright.async_api import Error as PlaywrightError, Page

from channel_tuner.browser.queries import IMAGE_READY_PREDICATE, TILE_TARGET
from channel_tuner.config import Settings
from channel_tuner.errors import BrowserError
from channel_tuner.logging import _tune_context, reset_tune_context, set_tune_context
from channel_tuner.selection import ChannelSelector
from channel_tuner.tuning.base import ChannelStrategy, ProviderCache
from channel_tuner.tuning.registry import StrategyRegistry
from channel_tuner.types import ProviderProfile, SelectorResult


class RecordingStrategy(ChannelStrategy):
    name = "recording"
    uses_image_slug = True

    def __init__(self, result: SelectorResult | None = None, error: Exception | None = None) -> None:
        self.result = result or SelectorResult.ok()
        self.error = error
        self.calls: list[ProviderProfile] = []
        self.caches: list[ProviderCache] = []

    async def select(self, page: Page, profile: ProviderProfile, cache: ProviderCache) -> SelectorResult:
        self.calls.append(profile)
        self.caches.append(cache)
        cache.set("seen", profile.channel_selector)
        if self.error is not None:
            raise self.error
        return self.result


class NameStrategy(RecordingStrategy):
    name = "nameGrid"
    uses_image_slug = False


def _selector(*strategies: ChannelStrategy) -> ChannelSelector:
    registry = StrategyRegistry()
    for strategy in strategies:
        registry.register(strategy)
    return ChannelSelector(settings=Settings(channel_selector_delay_ms=750), registry=registry)


@pytest.mark.asyncio
async def test_no_op_strategy_does_not_touch_page(page) -> None:
    selector = ChannelSelector()

    result = await selector.select_channel(page, ProviderProfile(strategy="none", channel_selector="espn"))

    assert result.success
    assert page.calls == []


@pytest.mark.asyncio
async def test_missing_selector_is_trivially_successful(page) -> None:
    strategy = RecordingStrategy()
    selector = _selector(strategy)

    result = await selector.select_channel(page, ProviderProfile(strategy="recording", channel_selector="  "))

    assert result.success
    assert page.calls == []
    assert strategy.calls == []


@pytest.mark.asyncio
async def test_unknown_strategy_warns_once(page, caplog) -> None:
    selector = _selector()

    with caplog.at_level(logging.DEBUG):
        result = await selector.select_channel(page, ProviderProfile(strategy="mysteryGrid", channel_selector="espn"))

    assert not result.success
    assert "unknown channel selection strategy" in (result.reason or "").lower()
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "mysteryGrid" in warnings[0].getMessage()


@pytest.mark.asyncio
async def test_polls_for_image_before_dispatch(page) -> None:
    strategy = RecordingStrategy(SelectorResult.failed("Channel tile not found in page images."))
    selector = _selector(strategy)
    profile = ProviderProfile(strategy="recording", channel_selector="espn_logo")

    result = await selector.select_channel(page, profile)

    assert result == SelectorResult.failed("Channel tile not found in page images.")
    assert strategy.calls == [profile]
    poll = page.calls[0]
    assert poll[0] == "wait_for_function"
    assert poll[1] == (IMAGE_READY_PREDICATE, "espn_logo")
    assert poll[2] == {"timeout": 750}


@pytest.mark.asyncio
async def test_image_poll_timeout_is_not_fatal(page) -> None:
    page.image_ready = False
    strategy = RecordingStrategy()
    selector = _selector(strategy)

    result = await selector.select_channel(page, ProviderProfile(strategy="recording", channel_selector="espn_logo"))

    assert result.success
    assert len(strategy.calls) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("strategy_name", ["foxGrid", "guideGrid", "hboGrid", "slingGrid", "youtubeGrid"])
async def test_skip_set_bypasses_image_poll(page, strategy_name: str) -> None:
    strategy = RecordingStrategy()
    strategy.name = strategy_name  # type: ignore[misc]
    selector = _selector(strategy)

    await selector.select_channel(page, ProviderProfile(strategy=strategy_name, channel_selector="ESPN"))

    assert "wait_for_function" not in page.call_names()
    assert len(strategy.calls) == 1


@pytest.mark.asyncio
async def test_name_based_strategy_bypasses_image_poll(page) -> None:
    strategy = NameStrategy()
    selector = _selector(strategy)

    await selector.select_channel(page, ProviderProfile(strategy="nameGrid", channel_selector="WLS"))

    assert "wait_for_function" not in page.call_names()


@pytest.mark.asyncio
async def test_browser_error_becomes_failure(page) -> None:
    strategy = RecordingStrategy(error=BrowserError("tile_target evaluation failed: Target closed"))
    selector = _selector(strategy)

    result = await selector.select_channel(page, ProviderProfile(strategy="recording", channel_selector="espn"))

    assert not result.success
    assert "Target closed" in (result.reason or "")


@pytest.mark.asyncio
async def test_clear_all_caches_resets_strategy_state(page) -> None:
    strategy = RecordingStrategy()
    selector = _selector(strategy)
    await selector.select_channel(page, ProviderProfile(strategy="recording", channel_selector="espn"))
    cache = strategy.caches[0]
    assert cache.get("seen") == "espn"

    selector.clear_all_caches()
    selector.clear_all_caches()

    assert len(cache) == 0


@pytest.mark.asyncio
async def test_default_registry_dispatches_tile_click(page) -> None:
    page.script(TILE_TARGET.script, {"x": 10, "y": 20})
    selector = ChannelSelector()

    result = await selector.select_channel(
        page, ProviderProfile(strategy="tileClick", channel_selector="poster_linear_espn_none")
    )

    assert result.success
    assert page.call_names()[0] == "wait_for_function"
    assert page.mouse.clicks == [(10.0, 20.0)]


@pytest.mark.asyncio
async def test_invalid_play_selector_ends_in_failure(page) -> None:
    page.script(TILE_TARGET.script, {"x": 10, "y": 20})
    page.selector_error = PlaywrightError("SyntaxError: 'button[' is not a valid selector")
    selector = ChannelSelector()

    result = await selector.select_channel(
        page,
        ProviderProfile(strategy="tileClick", channel_selector="poster_linear_espn_none", play_selector="button["),
    )

    assert result.success is False
    assert "not a valid selector" in (result.reason or "")


@pytest.mark.asyncio
async def test_click_on_closed_page_ends_in_failure(page) -> None:
    page.script(TILE_TARGET.script, {"x": 10, "y": 20})
    page.mouse.error = PlaywrightError("Target page, context or browser has been closed")
    selector = ChannelSelector()

    result = await selector.select_channel(
        page, ProviderProfile(strategy="tileClick", channel_selector="poster_linear_espn_none")
    )

    assert result.success is False
    assert "has been closed" in (result.reason or "")


@pytest.mark.asyncio
async def test_select_channel_keeps_outer_log_context(page) -> None:
    token = set_tune_context(session_id="s-1")
    try:
        await ChannelSelector().select_channel(page, ProviderProfile(strategy="tileClick", channel_selector="espn"))
        context = _tune_context.get()
    finally:
        reset_tune_context(token)

    assert context == {"session_id": "s-1"}
