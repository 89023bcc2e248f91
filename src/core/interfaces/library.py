"""Contracts for the collaborators of the selection flows."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import AlbumRef, MenuChoice, SongRef, Track


@runtime_checkable
class MusicLibrary(Protocol):
    """Read access to the music database and the play queue."""

    def list_artists(self) -> list[str]: ...

    def list_albums(self, artist: str | None = None) -> list[AlbumRef]: ...

    def list_album_titles(self, artist: str, album: str) -> list[str]: ...

    def list_all_songs(self) -> list[SongRef]: ...

    def find_song_album(self, artist: str, title: str) -> str | None: ...

    def get_playlist(self) -> list[Track]: ...

    def get_status(self) -> dict[str, str]: ...


@runtime_checkable
class Menu(Protocol):
    """Interactive single choice from a list of lines."""

    def select(
        self,
        items: Sequence[str],
        prompt: str,
        selected_row: int = 0,
        columns: bool = False,
    ) -> MenuChoice: ...


@runtime_checkable
class Player(Protocol):
    """Playback control over the server queue."""

    def clear(self) -> None: ...

    def play(self, position: int | None = None) -> None: ...

    def find_add(self, *filters: tuple[str, str]) -> None: ...

    def playlist_titles(self) -> list[str]: ...


@runtime_checkable
class Notifier(Protocol):
    """Desktop notification sink (best effort)."""

    def notify(self, artist: str, album: str, title: str | None = None) -> None: ...
