"""MPD client over the plain-text TCP protocol.

The protocol is line based: the server greets with `OK MPD <version>`, each
command is one line and every response ends with `OK` or an `ACK ...` error
line. Library responses are flat `Key: value` lines where a new song record
starts at each `file:` key.
"""

from __future__ import annotations

import logging
import socket
from typing import Iterable, TextIO

from core.config import AppSettings
from core.domain.models import AlbumRef, SongRef, Track
from core.errors import MpdCommandError, MpdConnectionError, MpdProtocolError

logger = logging.getLogger(__name__)

_GREETING_PREFIX = "OK MPD"
_RECORD_KEYS = ("file", "directory", "playlist")


def quote_arg(value: str) -> str:
    """Quote a command argument the way MPD's tokenizer expects."""

    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_command(name: str, *args: str) -> str:
    return " ".join([name, *(quote_arg(a) for a in args)])


def split_pair(line: str) -> tuple[str, str] | None:
    key, sep, value = line.partition(": ")
    if not sep:
        return None
    return key, value


def parse_records(lines: Iterable[str]) -> list[dict[str, str]]:
    """Group a response into song records.

    A record starts at each `file:` line; `directory:`/`playlist:` lines
    close the current record without opening a song. Repeated tags keep
    their first value.
    """

    records: list[dict[str, str]] = []
    current: dict[str, str] | None = None
    for line in lines:
        pair = split_pair(line)
        if pair is None:
            continue
        key, value = pair
        if key in _RECORD_KEYS:
            current = None
            if key == "file":
                current = {"file": value}
                records.append(current)
            continue
        if current is not None:
            current.setdefault(key, value)
    return records


def parse_status(lines: Iterable[str]) -> dict[str, str]:
    status: dict[str, str] = {}
    for line in lines:
        pair = split_pair(line)
        if pair is not None:
            status[pair[0]] = pair[1]
    return status


def record_to_track(record: dict[str, str]) -> Track:
    return Track(
        artist=record.get("AlbumArtist", ""),
        album=record.get("Album", ""),
        title=record.get("Title", ""),
        track=record.get("Track"),
        file=record.get("file", ""),
    )


def _close_all(reader: TextIO, writer: TextIO, sock: socket.socket) -> None:
    for stream in (writer, reader):
        try:
            stream.close()
        except OSError:
            logger.debug("Error closing MPD stream", exc_info=True)
    sock.close()


class MpdClient:
    """Synchronous MPD connection.

    Usable as a context manager; `close()` says goodbye to the server and
    releases the socket.
    """

    def __init__(self, reader: TextIO, writer: TextIO, sock: socket.socket | None = None) -> None:
        self._reader = reader
        self._writer = writer
        self._sock = sock

        greeting = self._read_line()
        if not greeting.startswith(_GREETING_PREFIX):
            raise MpdProtocolError(f"Invalid MPD greeting: {greeting!r}")
        self.version = greeting[len(_GREETING_PREFIX):].strip()
        logger.debug("Connected to MPD %s", self.version)

    @classmethod
    def connect(cls, settings: AppSettings | None = None) -> "MpdClient":
        settings = settings or AppSettings()
        address = (settings.mpd_host, settings.mpd_port)
        try:
            sock = socket.create_connection(address, timeout=settings.mpd_timeout_seconds)
        except OSError as exc:
            raise MpdConnectionError(
                f"Cannot connect to MPD at {settings.mpd_host}:{settings.mpd_port}: {exc}"
            ) from exc

        reader = sock.makefile("r", encoding="utf-8", newline="\n")
        writer = sock.makefile("w", encoding="utf-8", newline="\n")
        try:
            return cls(reader, writer, sock)
        except Exception:
            _close_all(reader, writer, sock)
            raise

    def __enter__(self) -> "MpdClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._sock is None:
            return
        try:
            self._writer.write("close\n")
            self._writer.flush()
        except OSError:
            logger.debug("Connection already gone while closing", exc_info=True)
        finally:
            # makefile() wrappers hold their own reference to the fd.
            _close_all(self._reader, self._writer, self._sock)
            self._sock = None

    def _read_line(self) -> str:
        try:
            line = self._reader.readline()
        except OSError as exc:
            raise MpdConnectionError(f"Lost connection to MPD: {exc}") from exc
        if not line:
            raise MpdConnectionError("MPD closed the connection")
        return line.rstrip("\n").strip()

    def send_command(self, command: str) -> list[str]:
        """Send one command and return its response lines (without `OK`)."""

        logger.debug("MPD >> %s", command)
        try:
            self._writer.write(command + "\n")
            self._writer.flush()
        except OSError as exc:
            raise MpdConnectionError(f"Lost connection to MPD: {exc}") from exc

        lines: list[str] = []
        while True:
            line = self._read_line()
            if line == "OK":
                break
            if line.startswith("ACK"):
                raise MpdCommandError(line)
            lines.append(line)
        logger.debug("MPD << %d lines", len(lines))
        return lines

    def list_artists(self) -> list[str]:
        artists: list[str] = []
        for line in self.send_command("list albumartist"):
            pair = split_pair(line)
            if pair is None or pair[0] != "AlbumArtist":
                continue
            if pair[1].strip():
                artists.append(pair[1])
        return artists

    def list_albums(self, artist: str | None = None) -> list[AlbumRef]:
        if artist is not None:
            command = build_command("find", "albumartist", artist)
        else:
            command = "listallinfo"

        albums: set[AlbumRef] = set()
        for record in parse_records(self.send_command(command)):
            album_artist = record.get("AlbumArtist", "")
            album = record.get("Album", "")
            if album_artist and album:
                albums.add(AlbumRef(artist=album_artist, album=album))
        return sorted(albums, key=lambda a: (a.artist, a.album))

    def list_album_titles(self, artist: str, album: str) -> list[str]:
        command = build_command("find", "albumartist", artist, "album", album)
        return [
            record["Title"]
            for record in parse_records(self.send_command(command))
            if record.get("Title")
        ]

    def list_all_songs(self) -> list[SongRef]:
        return [
            SongRef(artist=record.get("AlbumArtist", ""), title=record["Title"])
            for record in parse_records(self.send_command("listallinfo"))
            if record.get("Title")
        ]

    def list_songs(self, artist: str | None = None, album: str | None = None) -> list[str]:
        """Song menu lines: titles of one album, or `artist\\ttitle` for all songs."""

        if artist is not None and album is not None:
            return self.list_album_titles(artist, album)
        return [song.menu_label() for song in self.list_all_songs()]

    def get_playlist(self) -> list[Track]:
        return [record_to_track(r) for r in parse_records(self.send_command("playlistinfo"))]

    def get_status(self) -> dict[str, str]:
        return parse_status(self.send_command("status"))

    def find_song_album(self, artist: str, title: str) -> str | None:
        command = build_command("find", "albumartist", artist, "title", title)
        for record in parse_records(self.send_command(command)):
            album = record.get("Album")
            if album:
                return album
        return None
