"""Playback control through the `mpc` command line client."""

from __future__ import annotations

import logging
import subprocess

from core.config import AppSettings
from core.errors import PlayerUnavailableError

logger = logging.getLogger(__name__)


class MpcPlayer:
    """Thin wrapper over `mpc`, pointed at the configured MPD server."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    def _run(self, *args: str) -> str:
        argv = [
            self._settings.mpc_binary,
            f"--host={self._settings.mpd_host}",
            f"--port={self._settings.mpd_port}",
            *args,
        ]
        logger.debug("Running %s", argv)
        try:
            result = subprocess.run(argv, capture_output=True, text=True)
        except OSError as exc:
            raise PlayerUnavailableError(
                f"Cannot run {self._settings.mpc_binary!r}: {exc}"
            ) from exc
        if result.returncode != 0:
            logger.warning(
                "mpc %s exited with %s: %s",
                args[0],
                result.returncode,
                result.stderr.strip(),
            )
        return result.stdout

    def clear(self) -> None:
        self._run("clear")

    def play(self, position: int | None = None) -> None:
        if position is None:
            self._run("play")
        else:
            self._run("play", str(position))

    def find_add(self, *filters: tuple[str, str]) -> None:
        args: list[str] = []
        for tag, value in filters:
            args.extend([tag, value])
        self._run("findadd", *args)

    def playlist_titles(self) -> list[str]:
        output = self._run("playlist", "-f", "%title%")
        return output.strip().split("\n") if output.strip() else []
