"""Diagnostics emitted when a strategy cannot find the requested channel."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping, Sequence

from .presets import ChannelPreset, known_selectors

logger = logging.getLogger(__name__)

_TRAILING_PARENTHETICAL = re.compile(r" \(.*\)$")


def is_covered(name: str, selectors: Iterable[str]) -> bool:
    """True when a preset selector would already match ``name``.

    Covered means an exact match once a trailing parenthetical is stripped
    ("ESPN (West)"), or the selector followed by a space and a digit ("ESPN 2").
    """

    lower = name.lower()
    stripped = _TRAILING_PARENTHETICAL.sub("", lower)
    for selector in selectors:
        if stripped == selector:
            return True
        prefix = selector + " "
        if lower.startswith(prefix) and len(lower) > len(prefix) and lower[len(prefix)] in "0123456789":
            return True
    return False


def uncovered_channels(available: Sequence[str], selectors: Iterable[str]) -> list[str]:
    known = [selector.lower() for selector in selectors]
    return [name for name in available if not is_covered(name, known)]


def log_available_channels(
    available_channels: Sequence[str],
    channel_name: str,
    guide_url: str,
    provider_name: str,
    preset_suffix: str | None = None,
    additional_known_names: Sequence[str] | None = None,
    presets: Mapping[str, ChannelPreset] | None = None,
) -> None:
    """Log the channel names a user could configure instead of ``channel_name``.

    Without ``preset_suffix`` every discovered name is listed. With it, names
    already reachable through a built-in preset for that provider family are
    left out so only channels needing manual configuration are shown.
    """

    if not available_channels:
        return

    if preset_suffix:
        selectors = known_selectors(preset_suffix, presets)
        if additional_known_names:
            selectors.extend(name.lower() for name in additional_known_names)
        filtered = uncovered_channels(available_channels, selectors)
        count_label = f"uncovered ({len(filtered)} of {len(available_channels)})"
    else:
        filtered = list(available_channels)
        count_label = str(len(filtered))

    if not filtered:
        return

    logger.warning(
        'Channel "%s" not found in %s guide. Create a user-defined channel with one of the names below as the '
        "Channel Selector and %s as the URL. Available channels (%s): %s.",
        channel_name,
        provider_name,
        guide_url,
        count_label,
        ", ".join(filtered),
    )
