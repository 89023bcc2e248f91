"""Error hierarchy shared by adapters and the CLI.

Adapters raise these; core services let them propagate and the CLI turns
them into a one-line message with exit code 1.
"""

from __future__ import annotations


class MusicSelectionError(Exception):
    """Base class for expected, user-facing failures."""


class MpdError(MusicSelectionError):
    """Anything that went wrong talking to MPD."""


class MpdConnectionError(MpdError):
    """The server could not be reached or the connection dropped."""


class MpdProtocolError(MpdError):
    """The server sent something that is not MPD protocol."""


class MpdCommandError(MpdError):
    """The server answered a command with an `ACK` line."""

    def __init__(self, ack: str) -> None:
        super().__init__(f"MPD error: {ack}")
        self.ack = ack


class MenuUnavailableError(MusicSelectionError):
    """The menu program (rofi) could not be started."""


class PlayerUnavailableError(MusicSelectionError):
    """The playback client (mpc) could not be started."""
