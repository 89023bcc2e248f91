"""Selection flows: artist -> album -> song, random picks, queue browsing.

All I/O goes through the collaborators in `core.interfaces.library`; the
messages meant for the user are handed to `SelectorHooks.message` so the
CLI decides how to print them.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from adapters.quarantine_loader import load_quarantine
from core.domain.models import AlbumRef, MenuChoice, SongRef, Track
from core.interfaces.library import Menu, MusicLibrary, Notifier, Player

logger = logging.getLogger(__name__)

UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_ALBUM = "Unknown Album"
UNKNOWN_TITLE = "Unknown Title"


def _discard(_: str) -> None:
    return None


@dataclass
class SelectorHooks:
    """Callbacks for UI layers."""

    message: Callable[[str], None] = _discard


@dataclass
class AlbumPick:
    """An album chosen from a menu (or at random)."""

    album: AlbumRef
    queue: bool = False


@dataclass
class MusicSelector:
    library: MusicLibrary
    menu: Menu
    player: Player
    notifier: Notifier
    quarantine_path: Path
    hooks: SelectorHooks = field(default_factory=SelectorHooks)
    rng: random.Random = field(default_factory=random.Random)

    def _say(self, text: str) -> None:
        self.hooks.message(text)

    # -- menus ---------------------------------------------------------------

    def select_artist(self) -> str | None:
        artists = self.library.list_artists()
        if not artists:
            self._say("No artists found")
            return None

        self.rng.shuffle(artists)
        return self.menu.select(artists, "Artist:").value

    def select_album(self, artist: str | None = None) -> AlbumPick | None:
        albums = self.library.list_albums(artist)
        if not albums:
            self._say("No albums found")
            return None

        self.rng.shuffle(albums)

        if artist is not None:
            names = [a.album for a in albums]
            choice = self.menu.select(names, "Album:")
            if choice.value is None:
                return None
            return AlbumPick(AlbumRef(artist=artist, album=choice.value), choice.queue)

        return self._pick_album_from(albums, "Album:")

    def _pick_album_from(self, albums: list[AlbumRef], prompt: str) -> AlbumPick | None:
        labels = [a.menu_label() for a in albums]
        choice = self.menu.select(labels, prompt, columns=True)
        if choice.value is None:
            return None
        return AlbumPick(albums[labels.index(choice.value)], choice.queue)

    def select_song(
        self,
        artist: str | None = None,
        album: str | None = None,
        preselect: int = 0,
    ) -> MenuChoice | None:
        """Song menu for one album, or for the whole library when neither is given.

        In whole-library mode the chosen value is `artist\\ttitle`.
        """

        all_songs = artist is None and album is None
        if all_songs:
            songs = [s.menu_label() for s in self.library.list_all_songs()]
        else:
            if artist is None or album is None:
                raise ValueError("artist and album must be given together")
            songs = self.library.list_album_titles(artist, album)

        if not songs:
            self._say("No songs found")
            return None

        if all_songs:
            self.rng.shuffle(songs)

        choice = self.menu.select(songs, "Choose a song:", preselect, columns=all_songs)
        return choice if choice.selected else None

    # -- playback ------------------------------------------------------------

    def play_song(self, artist: str, album: str | None, title: str, queue: bool = False) -> None:
        if album is None:
            album = self.library.find_song_album(artist, title)
        album_text = album or ""

        if queue:
            filters = [("albumartist", artist)]
            if album is not None:
                filters.append(("album", album))
            filters.append(("title", title))
            self.player.find_add(*filters)
            self._say(f"Queued:\n{artist}\n{album_text}\n{title}")
            return

        self.player.clear()
        filters = []
        if album is not None:
            filters.append(("album", album))
        filters.append(("albumartist", artist))
        self.player.find_add(*filters)

        titles = self.player.playlist_titles()
        if title in titles:
            self.player.play(titles.index(title) + 1)
            self._say(f"Playing:\n{artist}\n{album_text}\n{title}")
        else:
            self.player.play()
            self._say(f"Could not find song '{title}' in playlist")

    def play_song_ref(self, song: SongRef, queue: bool = False) -> None:
        self.play_song(song.artist, None, song.title, queue)

    def queue_album(self, album: AlbumRef) -> None:
        self.player.find_add(("album", album.album), ("albumartist", album.artist))
        self._say(f"Queued album:\n{album.artist}\n{album.album}")

    def _replace_queue_with_album(self, album: AlbumRef) -> None:
        self.player.clear()
        self.player.find_add(("album", album.album), ("albumartist", album.artist))
        self.player.play()

    def play_album_then_song(self, pick: AlbumPick, preselect: int = 0) -> None:
        """Queue the album, or open its song menu and play/queue the choice."""

        if pick.queue:
            self.queue_album(pick.album)
            return

        choice = self.select_song(pick.album.artist, pick.album.album, preselect)
        if choice is not None and choice.value is not None:
            self.play_song(pick.album.artist, pick.album.album, choice.value, choice.queue)

    def play_random_album(self) -> AlbumRef | None:
        albums = self.library.list_albums()
        if not albums:
            self._say("No albums found")
            return None

        album = self.rng.choice(albums)
        self._replace_queue_with_album(album)
        self._say(f"Playing random album:\n{album.artist}\n{album.album}")
        self.notifier.notify(album.artist, album.album)
        return album

    # -- quarantine ----------------------------------------------------------

    def load_quarantine_albums(self) -> list[AlbumRef]:
        albums = load_quarantine(self.quarantine_path)
        if albums is None:
            self._say(f"Quarantine file not found: {self.quarantine_path}")
            return []
        return albums

    def select_quarantine_album(self, random_mode: bool = False) -> AlbumPick | None:
        albums = self.load_quarantine_albums()
        if not albums:
            self._say("No quarantine albums found")
            return None

        if random_mode:
            return AlbumPick(self.rng.choice(albums))
        return self._pick_album_from(albums, "Quarantine Album:")

    def play_random_quarantine_album(self) -> AlbumRef | None:
        pick = self.select_quarantine_album(random_mode=True)
        if pick is None:
            return None

        album = pick.album
        self._replace_queue_with_album(album)
        self._say(f"Playing random quarantine album:\n{album.artist}\n{album.album}")
        self.notifier.notify(album.artist, album.album)
        return album

    # -- current queue -------------------------------------------------------

    def show_playlist(self) -> Track | None:
        playlist = self.library.get_playlist()
        if not playlist:
            self._say("Playlist is empty")
            return None

        status = self.library.get_status()
        try:
            current = max(int(status.get("song", "0")), 0)
        except ValueError:
            current = 0

        items = [playlist_label(track) for track in playlist]
        choice = self.menu.select(items, "Playlist:", current, columns=True)
        if choice.value is None:
            return None

        index = items.index(choice.value)
        self.player.play(index + 1)

        track = playlist[index]
        self.notifier.notify(
            track.artist or UNKNOWN_ARTIST,
            track.album or UNKNOWN_ALBUM,
            track.title or UNKNOWN_TITLE,
        )
        logger.debug("Jumped to queue position %d (%s)", index + 1, track.file)
        return track


def playlist_label(track: Track) -> str:
    """Menu line for a queue entry: `artist\\t[nn ]title`."""

    artist = track.artist or UNKNOWN_ARTIST
    title = track.title or UNKNOWN_TITLE
    number = track.track_number()
    if number is not None:
        title = f"{number:02d} {title}"
    return f"{artist}\t{title}"
