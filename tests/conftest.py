from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any

import pytest
from playwright.async_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from channel_tuner.browser import primitives


@dataclass
class DummyMouse:
    clicks: list[tuple[float, float]] = field(default_factory=list)
    error: PlaywrightError | None = None

    async def click(self, x: float, y: float) -> None:
        if self.error is not None:
            raise self.error
        self.clicks.append((x, y))


class DummyPage:
    """Records calls and replays scripted evaluation and wait outcomes.

    ``evaluate_results`` maps a script to the queue of values successive
    evaluations return. ``selector_waits`` maps a wait state ("attached",
    "hidden") to a queue of booleans; ``False`` raises a Playwright timeout.
    Exhausted queues repeat their last value.
    """

    def __init__(self, url: str = "https://example.com/live") -> None:
        self.url = url
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []
        self.mouse = DummyMouse()
        self.evaluate_results: dict[str, deque[Any]] = {}
        self.selector_waits: dict[str, deque[bool]] = {}
        self.image_ready = True
        self.selector_error: PlaywrightError | None = None

    def script(self, script: str, *results: Any) -> None:
        self.evaluate_results[script] = deque(results)

    def waits(self, state: str, *outcomes: bool) -> None:
        self.selector_waits[state] = deque(outcomes)

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]

    @staticmethod
    def _next(queue: deque[Any] | None, default: Any) -> Any:
        if not queue:
            return default
        if len(queue) == 1:
            return queue[0]
        return queue.popleft()

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        self.calls.append(("evaluate", (script, arg), {}))
        return self._next(self.evaluate_results.get(script), None)

    async def wait_for_function(self, script: str, arg: Any = None, timeout: float | None = None) -> None:
        self.calls.append(("wait_for_function", (script, arg), {"timeout": timeout}))
        if not self.image_ready:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")

    async def wait_for_selector(self, selector: str, state: str = "visible", timeout: float | None = None) -> None:
        self.calls.append(("wait_for_selector", (selector,), {"state": state, "timeout": timeout}))
        if self.selector_error is not None:
            raise self.selector_error
        if not self._next(self.selector_waits.get(state), True):
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")


@pytest.fixture(autouse=True)
def no_settle_delay(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(primitives, "CLICK_SETTLE_DELAY_S", 0)


@pytest.fixture
def page() -> DummyPage:
    return DummyPage()
