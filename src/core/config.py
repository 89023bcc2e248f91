"""Application configuration.

Centralizes environment variables (pydantic-settings) so adapters read the
MPD address, binary names and file locations from one place.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (XDG on Linux, native elsewhere)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "music-selection"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "music-selection"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "music-selection"
    return Path.home() / ".config" / "music-selection"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


ENV_PREFIX = "MUSIC_SELECTION_"


def _read_owned_vars(path: Path) -> dict[str, str]:
    """`MUSIC_SELECTION_*` assignments from an existing .env; other lines are dropped."""

    data: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = raw_line.strip().partition("=")
        key = key.strip()
        if not sep or not key.upper().startswith(ENV_PREFIX):
            continue
        data[key.upper()] = value.strip().strip('"').strip("'")
    return data


def write_user_settings(values: dict[str, object]) -> Path:
    """Persist settings (by `AppSettings` field name) to the user .env file.

    Values are validated against `AppSettings` before anything is written;
    unknown fields raise `ValueError`.
    """

    unknown = sorted(set(values) - set(AppSettings.model_fields))
    if unknown:
        raise ValueError(f"Unknown setting(s): {', '.join(unknown)}")
    AppSettings(_env_file=None, **values)

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    owned = _read_owned_vars(env_path) if env_path.exists() else {}
    owned.update({f"{ENV_PREFIX}{name.upper()}": str(value) for name, value in values.items()})

    lines = ["# music_selection user config (.env)"]
    lines.extend(f"{key}={owned[key]}" for key in sorted(owned))
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Values come from `MUSIC_SELECTION_*` environment variables, then the
    project `.env`, then the per-user `.env` written by `doctor configure`.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    mpd_host: str = Field(
        default="localhost",
        min_length=1,
        description="Host of the MPD server.",
    )
    mpd_port: int = Field(
        default=6600,
        ge=1,
        le=65535,
        description="TCP port of the MPD server.",
    )
    mpd_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Socket timeout for MPD requests (seconds).",
    )

    quarantine_path: Path | None = Field(
        default=None,
        description="Quarantine list file. Defaults to ~/music/quarantine.",
    )

    rofi_binary: str = Field(default="rofi", min_length=1)
    mpc_binary: str = Field(default="mpc", min_length=1)
    column_binary: str = Field(default="column", min_length=1)
    notify_binary: str = Field(default="notify-send", min_length=1)

    column_separator: str = Field(
        default=" " * 11,
        min_length=1,
        description="Output separator passed to `column -o`.",
    )
    notify_timeout_ms: int = Field(
        default=3000,
        ge=0,
        description="Desktop notification timeout (milliseconds).",
    )

    def resolved_quarantine_path(self) -> Path:
        if self.quarantine_path is not None:
            return self.quarantine_path.expanduser()
        return Path.home() / "music" / "quarantine"
