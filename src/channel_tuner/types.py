from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import orjson
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ParsingError

NO_SELECTION_STRATEGY = "none"


class ProviderProfile(BaseModel):
    """Resolved, read-only channel selection settings for one channel."""

    strategy: str = Field(default=NO_SELECTION_STRATEGY, min_length=1)
    channel_selector: str | None = None
    play_selector: str | None = None
    name: str | None = None

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("channel_selector", "play_selector", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def needs_selection(self) -> bool:
        return self.strategy != NO_SELECTION_STRATEGY and bool(self.channel_selector)

    def label(self) -> str:
        return self.name or self.channel_selector or self.strategy


class ClickTarget(BaseModel):
    """Viewport coordinates of a click. Never cached across clicks."""

    x: float
    y: float

    model_config = {"frozen": True}

    @classmethod
    def from_payload(cls, payload: Any) -> "ClickTarget | None":
        if payload is None:
            return None
        try:
            return cls.model_validate(payload)
        except ValidationError:
            return None


@dataclass(frozen=True, slots=True)
class SelectorResult:
    """Outcome of a channel selection attempt."""

    success: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> "SelectorResult":
        return cls(success=True)

    @classmethod
    def failed(cls, reason: str) -> "SelectorResult":
        return cls(success=False, reason=reason)

    def describe(self) -> str:
        if self.success:
            return "selected"
        return f"failed: {self.reason or 'unknown reason'}"


def load_profile(raw: str | bytes) -> ProviderProfile:
    """Parse a JSON provider profile.

    Accepts both snake_case keys and the camelCase keys used by exported
    channel definitions (``channelSelector``, ``playSelector``).
    """

    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ParsingError(f"Profile is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ParsingError("Profile must be a JSON object")

    aliases = {"channelSelector": "channel_selector", "playSelector": "play_selector"}
    normalised: dict[str, Any] = {}
    for key, value in data.items():
        normalised[aliases.get(key, key)] = value

    # Nested form: {"channelSelection": {"strategy": ..., "playSelector": ...}, "channelSelector": ...}
    nested = normalised.pop("channelSelection", None)
    if isinstance(nested, dict):
        for key, value in nested.items():
            normalised.setdefault(aliases.get(key, key), value)

    try:
        return ProviderProfile.model_validate(normalised)
    except ValidationError as exc:
        raise ParsingError(str(exc)) from exc
