from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True, slots=True)
class ChannelPreset:
    """Built-in channel definition shipped with the tuner."""

    name: str
    url: str
    channel_selector: str | None = None


# Keys end with a provider suffix so diagnostics can scope the catalog to one provider family.
CHANNELS: Mapping[str, ChannelPreset] = {
    "abc-yttv": ChannelPreset("ABC", "https://tv.youtube.com/live", "ABC"),
    "cbs-yttv": ChannelPreset("CBS", "https://tv.youtube.com/live", "CBS"),
    "cnn-yttv": ChannelPreset("CNN", "https://tv.youtube.com/live", "CNN"),
    "espn-yttv": ChannelPreset("ESPN", "https://tv.youtube.com/live", "ESPN"),
    "fox-yttv": ChannelPreset("FOX", "https://tv.youtube.com/live", "FOX"),
    "nbc-yttv": ChannelPreset("NBC", "https://tv.youtube.com/live", "NBC"),
    "abc-hulu": ChannelPreset("ABC", "https://www.hulu.com/live", "ABC"),
    "espn-hulu": ChannelPreset("ESPN", "https://www.hulu.com/live", "ESPN"),
    "fx-hulu": ChannelPreset("FX", "https://www.hulu.com/live", "FX"),
    "cnn-sling": ChannelPreset("CNN", "https://watch.sling.com/dashboard/grid_guide/grid_guide_a_z", "CNN"),
    "espn-sling": ChannelPreset("ESPN", "https://watch.sling.com/dashboard/grid_guide/grid_guide_a_z", "ESPN"),
    "espn-disney": ChannelPreset("ESPN", "https://www.disneyplus.com/browse/espn", "poster_linear_espn_none"),
    "usa": ChannelPreset("USA Network", "https://www.usanetwork.com/live"),
}


def known_selectors(suffix: str, catalog: Mapping[str, ChannelPreset] | None = None) -> list[str]:
    """Lowercased channel selectors of every preset whose key ends with ``suffix``."""

    presets = CHANNELS if catalog is None else catalog
    return [
        preset.channel_selector.lower()
        for key, preset in presets.items()
        if key.endswith(suffix) and preset.channel_selector
    ]
