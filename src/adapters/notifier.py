"""Desktop notifications via `notify-send`."""

from __future__ import annotations

import logging
import subprocess

from core.config import AppSettings

logger = logging.getLogger(__name__)


def build_notification(artist: str, album: str, title: str | None = None) -> tuple[str, str]:
    """Return `(summary, body)` for a now-playing notification."""

    if title is not None:
        return "Now Playing", f"{artist}\n{album}\n{title}"
    return "Now Playing Album", f"{artist}\n{album}"


class DesktopNotifier:
    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    def notify(self, artist: str, album: str, title: str | None = None) -> None:
        summary, body = build_notification(artist, album, title)
        argv = [
            self._settings.notify_binary,
            "-t",
            str(self._settings.notify_timeout_ms),
            summary,
            body,
        ]
        try:
            result = subprocess.run(argv, capture_output=True, text=True)
        except OSError as exc:
            # Notifications are cosmetic; playback already happened.
            logger.info("Notification skipped: %s", exc)
            return
        if result.returncode != 0:
            logger.warning(
                "notify-send exited with %s: %s",
                result.returncode,
                result.stderr.strip(),
            )
