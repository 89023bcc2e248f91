"""Command line entry point (Typer).

Each invocation runs one selection flow against the configured MPD server
and exits. Without a subcommand the album flow runs.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

import typer
from rich.console import Console

from adapters.mpc_player import MpcPlayer
from adapters.mpd_client import MpdClient
from adapters.notifier import DesktopNotifier
from adapters.rofi_menu import RofiMenu
from cli import doctor
from cli.ui_components import configure_logging, print_error, print_message
from core.config import AppSettings
from core.errors import MusicSelectionError
from core.services.music_selector import MusicSelector, SelectorHooks

app = typer.Typer(
    name="music_selection",
    help="Music selection tool",
    add_completion=False,
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


@dataclass
class CliState:
    settings: AppSettings
    artist: str | None = None
    album: str | None = None
    preselect: int = 0


@contextmanager
def open_selector(settings: AppSettings) -> Iterator[MusicSelector]:
    """Connect to MPD and wire the default adapters into a `MusicSelector`."""

    with MpdClient.connect(settings) as library:
        yield MusicSelector(
            library=library,
            menu=RofiMenu(settings),
            player=MpcPlayer(settings),
            notifier=DesktopNotifier(settings),
            quarantine_path=settings.resolved_quarantine_path(),
            hooks=SelectorHooks(message=lambda text: print_message(_console, text)),
        )


def _run_flow(ctx: typer.Context, flow: Callable[[MusicSelector, CliState], None]) -> None:
    state: CliState = ctx.obj
    try:
        with open_selector(state.settings) as selector:
            flow(selector, state)
    except MusicSelectionError as exc:
        logger.debug("Flow failed", exc_info=True)
        print_error(_err_console, str(exc))
        raise typer.Exit(code=1) from exc


def _album_flow(selector: MusicSelector, state: CliState) -> None:
    pick = selector.select_album(state.artist)
    if pick is not None:
        selector.play_album_then_song(pick, state.preselect)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    artist: Optional[str] = typer.Option(None, "--artist", help="Pre-select artist"),
    album: Optional[str] = typer.Option(
        None, "--album", help="Pre-select album (requires --artist)"
    ),
    preselect: int = typer.Option(0, "--preselect", min=0, help="Pre-select song index"),
    host: Optional[str] = typer.Option(None, "--host", help="MPD host (overrides config)"),
    port: Optional[int] = typer.Option(
        None, "--port", min=1, max=65535, help="MPD port (overrides config)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
) -> None:
    """Music selection tool: pick music from MPD with rofi."""

    configure_logging(verbose=verbose)

    if album is not None and artist is None:
        raise typer.BadParameter("--album requires --artist", param_hint="--album")

    overrides: dict[str, object] = {}
    if host is not None:
        overrides["mpd_host"] = host
    if port is not None:
        overrides["mpd_port"] = port

    ctx.obj = CliState(
        settings=AppSettings(**overrides),
        artist=artist,
        album=album,
        preselect=preselect,
    )

    if ctx.invoked_subcommand is None:
        # Plain invocation ignores the pre-selected artist, like `album` without flags.
        ctx.obj.artist = None
        _run_flow(ctx, _album_flow)


@app.command()
def artist(ctx: typer.Context) -> None:
    """Select artist then album then song."""

    def flow(selector: MusicSelector, state: CliState) -> None:
        chosen = selector.select_artist()
        if chosen is None:
            return
        pick = selector.select_album(chosen)
        if pick is not None:
            selector.play_album_then_song(pick, state.preselect)

    _run_flow(ctx, flow)


@app.command()
def album(ctx: typer.Context) -> None:
    """Select album then song."""

    def flow(selector: MusicSelector, state: CliState) -> None:
        if state.artist is not None and state.album is not None:
            choice = selector.select_song(state.artist, state.album, state.preselect)
            if choice is not None and choice.value is not None:
                selector.play_song(state.artist, state.album, choice.value, choice.queue)
            return
        _album_flow(selector, state)

    _run_flow(ctx, flow)


@app.command()
def song(ctx: typer.Context) -> None:
    """Select song from all songs."""

    def flow(selector: MusicSelector, state: CliState) -> None:
        choice = selector.select_song(preselect=state.preselect)
        if choice is None or choice.value is None:
            return
        song_artist, sep, title = choice.value.partition("\t")
        if sep:
            selector.play_song(song_artist, None, title, choice.queue)

    _run_flow(ctx, flow)


@app.command()
def random(ctx: typer.Context) -> None:
    """Play a random album without prompts."""

    _run_flow(ctx, lambda selector, _state: selector.play_random_album())


@app.command()
def quarantine(ctx: typer.Context) -> None:
    """Select album from quarantine list."""

    def flow(selector: MusicSelector, state: CliState) -> None:
        pick = selector.select_quarantine_album(random_mode=False)
        if pick is not None:
            selector.play_album_then_song(pick, state.preselect)

    _run_flow(ctx, flow)


@app.command(name="random-quarantine")
def random_quarantine(ctx: typer.Context) -> None:
    """Play a random quarantine album without prompts."""

    _run_flow(ctx, lambda selector, _state: selector.play_random_quarantine_album())


@app.command()
def playlist(ctx: typer.Context) -> None:
    """Show current playlist and jump to selected song."""

    _run_flow(ctx, lambda selector, _state: selector.show_playlist())


def run() -> None:
    app()
