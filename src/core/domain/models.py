"""Domain models (Pydantic v2).

These models describe *what* the library and queue data are, not *how* they
are fetched from MPD.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Track(BaseModel):
    """A song record as reported by MPD (queue or library).

    Missing tags are empty strings; `track` keeps the raw tag (e.g. "3/12").
    """

    artist: str = Field(default="", description="AlbumArtist tag.")
    album: str = Field(default="", description="Album tag.")
    title: str = Field(default="", description="Title tag.")
    track: str | None = Field(
        default=None,
        description="Raw Track tag, optionally `number/total`.",
    )
    file: str = Field(default="", description="Song URI relative to the music directory.")

    def track_number(self) -> int | None:
        """Parsed track number, `0` when the tag is present but not numeric."""

        if self.track is None:
            return None
        head = self.track.split("/", 1)[0].strip()
        if not head:
            return None
        try:
            return max(int(head), 0)
        except ValueError:
            return 0


class AlbumRef(BaseModel):
    """An album identified by its album artist and name."""

    model_config = ConfigDict(frozen=True)

    artist: str = Field(..., description="AlbumArtist tag.")
    album: str = Field(..., description="Album tag.")

    def menu_label(self) -> str:
        return f"{self.artist}\t{self.album}"


class SongRef(BaseModel):
    """A song identified by album artist and title (album unknown)."""

    model_config = ConfigDict(frozen=True)

    artist: str
    title: str

    def menu_label(self) -> str:
        return f"{self.artist}\t{self.title}"


class MenuChoice(BaseModel):
    """Outcome of a menu prompt."""

    model_config = ConfigDict(frozen=True)

    value: str | None = Field(
        default=None,
        description="Selected item text, `None` when cancelled or nothing matched.",
    )
    queue: bool = Field(
        default=False,
        description="True when the user picked with the queue key binding.",
    )

    @property
    def selected(self) -> bool:
        return self.value is not None
