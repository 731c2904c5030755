from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer

from .browser.session import BrowserSession
from .config import Settings
from .errors import BrowserError, ConfigurationError, ParsingError
from .logging import setup_logging
from .selection import SKIP_IMAGE_POLLING, ChannelSelector
from .tuning.registry import default_registry
from .types import ProviderProfile, SelectorResult, load_profile

app = typer.Typer(no_args_is_help=True)


def main() -> None:
    app()


@app.command()
def tune(
    url: str = typer.Option(..., help="Multi-channel player URL"),
    profile_file: Optional[Path] = typer.Option(None, "--profile", help="JSON provider profile"),
    strategy: Optional[str] = typer.Option(None, help="Channel selection strategy identifier"),
    selector: Optional[str] = typer.Option(None, help="Channel selector value (slug, station code or name)"),
    play_selector: Optional[str] = typer.Option(None, help="CSS selector of the play button shown after the tile click"),
    headful: bool = typer.Option(False, help="Run browser in headed mode"),
) -> None:
    """Open URL and select the configured channel."""

    profile = _build_profile(profile_file, strategy, selector, play_selector)

    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        raise typer.BadParameter(f"Invalid configuration: {exc}") from exc
    settings.ensure_directories()
    setup_logging(settings.log_level, settings.log_dir / "channel-tuner.log")

    headless = settings.headless_default and not headful
    result = asyncio.run(_tune(url, profile, settings, headless=headless))

    typer.echo(f"Channel selection {result.describe()}")
    if not result.success:
        raise typer.Exit(code=1)


@app.command()
def strategies() -> None:
    """List registered channel selection strategies."""

    registry = default_registry(Settings.from_env())
    for strategy in registry:
        polling = "image-ready wait" if strategy.uses_image_slug and strategy.name not in SKIP_IMAGE_POLLING else "no wait"
        typer.echo(f"{strategy.name}\t{polling}")


def _build_profile(
    profile_file: Optional[Path],
    strategy: Optional[str],
    selector: Optional[str],
    play_selector: Optional[str],
) -> ProviderProfile:
    if profile_file is not None:
        try:
            return load_profile(profile_file.read_bytes())
        except (OSError, ParsingError) as exc:
            raise typer.BadParameter(f"Unable to load profile {profile_file}: {exc}") from exc
    if not strategy:
        raise typer.BadParameter("Either --profile or --strategy is required")
    return ProviderProfile(strategy=strategy, channel_selector=selector, play_selector=play_selector)


async def _tune(url: str, profile: ProviderProfile, settings: Settings, headless: bool) -> SelectorResult:
    selector = ChannelSelector(settings=settings)
    async with BrowserSession(headless=headless) as session:
        session.on_restart(selector.clear_all_caches)
        try:
            await session.open_url(url)
        except BrowserError as exc:
            return SelectorResult.failed(str(exc))
        return await selector.select_channel(session.page, profile)
