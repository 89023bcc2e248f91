"""rofi dmenu adapter.

rofi is run with `-format d` so it prints the 1-based index of the chosen
line; that keeps the choice unambiguous even when `column` reformats the
visible text.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from core.config import AppSettings
from core.domain.models import MenuChoice
from core.errors import MenuUnavailableError

logger = logging.getLogger(__name__)

EXIT_CANCELLED = 1
EXIT_QUEUE = 10
QUEUE_KEY = "Ctrl+Return"


class RofiMenu:
    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    def format_columns(self, text: str) -> str:
        """Align tab separated fields with `column`; raw text on any failure."""

        args = [
            self._settings.column_binary,
            "-o",
            self._settings.column_separator,
            "-s",
            "\t",
            "-t",
        ]
        try:
            result = subprocess.run(args, input=text, capture_output=True, text=True)
        except OSError as exc:
            logger.debug("column unavailable, showing raw items: %s", exc)
            return text
        if result.returncode != 0:
            logger.debug("column exited with %s, showing raw items", result.returncode)
            return text
        return result.stdout

    def build_args(self, prompt: str, selected_row: int) -> list[str]:
        return [
            self._settings.rofi_binary,
            "-i",
            "-dmenu",
            "-no-custom",
            "-format",
            "d",
            "-kb-custom-1",
            QUEUE_KEY,
            "-p",
            prompt,
            "-selected-row",
            str(selected_row),
        ]

    def select(
        self,
        items: Sequence[str],
        prompt: str,
        selected_row: int = 0,
        columns: bool = False,
    ) -> MenuChoice:
        if not items:
            return MenuChoice()

        text = "\n".join(items)
        if columns:
            text = self.format_columns(text)

        try:
            result = subprocess.run(
                self.build_args(prompt, selected_row),
                input=text,
                capture_output=True,
                text=True,
            )
        except OSError as exc:
            raise MenuUnavailableError(
                f"Cannot run {self._settings.rofi_binary!r}: {exc}"
            ) from exc

        if result.returncode == EXIT_CANCELLED:
            return MenuChoice()

        output = result.stdout.strip()
        try:
            index = int(output)
        except ValueError:
            logger.debug("Unexpected menu output %r (exit %s)", output, result.returncode)
            return MenuChoice()

        if not 1 <= index <= len(items):
            return MenuChoice()
        return MenuChoice(value=items[index - 1], queue=result.returncode == EXIT_QUEUE)
