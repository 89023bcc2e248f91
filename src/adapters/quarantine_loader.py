"""Loader for the quarantine list.

One album per line, both fields double quoted:

    "Artist", "Album"

Blank or malformed lines are skipped.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from core.domain.models import AlbumRef

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r'^"([^"]*)",\s*"([^"]*)"$')


def parse_quarantine(text: str) -> list[AlbumRef]:
    albums: list[AlbumRef] = []
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue
        match = _LINE_RE.match(line)
        if match is None:
            logger.debug("Skipping quarantine line %d: %r", lineno, line)
            continue
        albums.append(AlbumRef(artist=match.group(1), album=match.group(2)))
    return albums


def load_quarantine(path: Path) -> list[AlbumRef] | None:
    """Parse the quarantine file, `None` when it does not exist."""

    if not path.exists():
        return None
    return parse_quarantine(path.read_text(encoding="utf-8"))
