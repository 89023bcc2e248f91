"""Doctor command for environment diagnostics."""

from __future__ import annotations

import shutil
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.mpd_client import MpdClient
from cli.ui_components import build_doctor_table
from core.config import AppSettings, write_user_settings
from core.errors import MpdError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _settings_from(ctx: typer.Context) -> AppSettings:
    state = ctx.obj
    settings = getattr(state, "settings", None)
    return settings if isinstance(settings, AppSettings) else AppSettings()


def check_mpd(settings: AppSettings) -> tuple[bool, str]:
    try:
        with MpdClient.connect(settings) as client:
            return True, f"MPD {client.version} at {settings.mpd_host}:{settings.mpd_port}"
    except MpdError as exc:
        return False, str(exc)


def check_binary(name: str) -> tuple[bool, str]:
    path = shutil.which(name)
    if path is None:
        return False, f"{name} not found on PATH"
    return True, path


def check_quarantine(path: Path) -> tuple[bool, str]:
    if path.is_file():
        return True, str(path)
    return False, f"{path} does not exist"


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = _settings_from(ctx)
    table = build_doctor_table()

    ok_mpd, detail_mpd = check_mpd(settings)
    table.add_row("MPD connection", "OK" if ok_mpd else "FAIL", detail_mpd)

    required = {
        "menu (rofi)": settings.rofi_binary,
        "player (mpc)": settings.mpc_binary,
    }
    optional = {
        "columns (column)": settings.column_binary,
        "notifications (notify-send)": settings.notify_binary,
    }
    all_required = ok_mpd
    for label, binary in required.items():
        ok, detail = check_binary(binary)
        all_required = all_required and ok
        table.add_row(label, "OK" if ok else "FAIL", detail)
    for label, binary in optional.items():
        ok, detail = check_binary(binary)
        table.add_row(label, "OK" if ok else "OPTIONAL", detail)

    ok_q, detail_q = check_quarantine(settings.resolved_quarantine_path())
    table.add_row("Quarantine list", "OK" if ok_q else "OPTIONAL", detail_q)

    _console.print(table)

    if not ok_mpd:
        _console.print(
            "\n[yellow]Note:[/yellow] set MUSIC_SELECTION_MPD_HOST / MUSIC_SELECTION_MPD_PORT "
            "or run `music_selection doctor configure`."
        )
    if not all_required:
        raise typer.Exit(code=1)

@app.command()
def configure(ctx: typer.Context) -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = _settings_from(ctx)

    host = typer.prompt("MPD host", default=settings.mpd_host, show_default=True).strip()
    port = typer.prompt("MPD port", default=settings.mpd_port, type=int, show_default=True)
    quarantine = typer.prompt(
        "Quarantine list",
        default=str(settings.resolved_quarantine_path()),
        show_default=True,
    ).strip()

    try:
        env_path = write_user_settings(
            {"mpd_host": host, "mpd_port": port, "quarantine_path": quarantine}
        )
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors())
        raise typer.BadParameter(f"invalid value for {fields}") from exc

    _console.print(f"[green]Saved config to:[/green] {env_path}")
