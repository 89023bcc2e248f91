"""Shared fakes for the selection flows.

The fakes record every call so tests can assert on the exact mpc/menu
traffic a flow produces.
"""
from __future__ import annotations

import random
from pathlib import Path
from typing import Sequence

import pytest

from core.domain.models import AlbumRef, MenuChoice, SongRef, Track
from core.services.music_selector import MusicSelector, SelectorHooks


GREETING = "OK MPD 0.23.5\n"


class FakeLibrary:
    def __init__(
        self,
        *,
        artists: list[str] | None = None,
        albums: list[AlbumRef] | None = None,
        album_titles: dict[tuple[str, str], list[str]] | None = None,
        songs: list[SongRef] | None = None,
        song_albums: dict[tuple[str, str], str] | None = None,
        playlist: list[Track] | None = None,
        status: dict[str, str] | None = None,
    ) -> None:
        self.artists = artists or []
        self.albums = albums or []
        self.album_titles = album_titles or {}
        self.songs = songs or []
        self.song_albums = song_albums or {}
        self.playlist = playlist or []
        self.status = status or {}

    def list_artists(self) -> list[str]:
        return list(self.artists)

    def list_albums(self, artist: str | None = None) -> list[AlbumRef]:
        return [a for a in self.albums if artist is None or a.artist == artist]

    def list_album_titles(self, artist: str, album: str) -> list[str]:
        return list(self.album_titles.get((artist, album), []))

    def list_all_songs(self) -> list[SongRef]:
        return list(self.songs)

    def find_song_album(self, artist: str, title: str) -> str | None:
        return self.song_albums.get((artist, title))

    def get_playlist(self) -> list[Track]:
        return list(self.playlist)

    def get_status(self) -> dict[str, str]:
        return dict(self.status)


class FakeMenu:
    """Answers prompts from a script of `(value, queue)` pairs.

    A scripted value that is not among the offered items counts as a cancel.
    """

    def __init__(self, answers: Sequence[tuple[str | None, bool]] = ()) -> None:
        self.answers = list(answers)
        self.calls: list[dict] = []

    def select(
        self,
        items: Sequence[str],
        prompt: str,
        selected_row: int = 0,
        columns: bool = False,
    ) -> MenuChoice:
        self.calls.append(
            {"items": list(items), "prompt": prompt, "selected_row": selected_row, "columns": columns}
        )
        if not self.answers:
            return MenuChoice()
        value, queue = self.answers.pop(0)
        if value is None or value not in items:
            return MenuChoice()
        return MenuChoice(value=value, queue=queue)


class FakePlayer:
    def __init__(self, titles_after_add: list[str] | None = None) -> None:
        self.calls: list[tuple] = []
        self.titles_after_add = titles_after_add or []

    def clear(self) -> None:
        self.calls.append(("clear",))

    def play(self, position: int | None = None) -> None:
        self.calls.append(("play", position))

    def find_add(self, *filters: tuple[str, str]) -> None:
        self.calls.append(("findadd", *filters))

    def playlist_titles(self) -> list[str]:
        return list(self.titles_after_add)


class FakeNotifier:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str | None]] = []

    def notify(self, artist: str, album: str, title: str | None = None) -> None:
        self.calls.append((artist, album, title))


@pytest.fixture
def messages() -> list[str]:
    return []


@pytest.fixture
def make_selector(messages: list[str], tmp_path: Path):
    """Factory building a `MusicSelector` around fakes."""

    def _make(
        library: FakeLibrary | None = None,
        menu: FakeMenu | None = None,
        player: FakePlayer | None = None,
        quarantine_text: str | None = None,
    ) -> MusicSelector:
        quarantine_path = tmp_path / "quarantine"
        if quarantine_text is not None:
            quarantine_path.write_text(quarantine_text, encoding="utf-8")
        return MusicSelector(
            library=library or FakeLibrary(),
            menu=menu or FakeMenu(),
            player=player or FakePlayer(),
            notifier=FakeNotifier(),
            quarantine_path=quarantine_path,
            hooks=SelectorHooks(message=messages.append),
            rng=random.Random(1234),
        )

    return _make
