"""Tests for the doctor commands and the user config writer."""
from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError
from typer.testing import CliRunner

from cli import doctor
from cli import main as cli_main
from cli.doctor import check_binary, check_mpd, check_quarantine
from core.config import AppSettings, write_user_settings

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kwargs: None)


def test_check_binary_missing():
    ok, detail = check_binary("definitely-not-a-real-binary-xyz")
    assert ok is False
    assert "not found" in detail


def test_check_quarantine(tmp_path: Path):
    path = tmp_path / "quarantine"
    assert check_quarantine(path)[0] is False
    path.write_text("", encoding="utf-8")
    assert check_quarantine(path) == (True, str(path))


def test_check_mpd_unreachable():
    # Port 1 on localhost is essentially never an MPD server.
    settings = AppSettings(_env_file=None, mpd_host="127.0.0.1", mpd_port=1, mpd_timeout_seconds=0.5)
    ok, detail = check_mpd(settings)
    assert ok is False
    assert "127.0.0.1:1" in detail


class TestWriteUserSettings:
    def test_merges_and_keeps_only_own_keys(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        env_file = tmp_path / "music-selection" / ".env"
        env_file.parent.mkdir(parents=True)
        env_file.write_text("OTHER_TOOL=1\nMUSIC_SELECTION_ROFI_BINARY=rofi-wayland\n", encoding="utf-8")

        write_user_settings({"mpd_host": "a"})
        path = write_user_settings({"mpd_port": 6601})

        assert path == env_file
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[1:] == [
            "MUSIC_SELECTION_MPD_HOST=a",
            "MUSIC_SELECTION_MPD_PORT=6601",
            "MUSIC_SELECTION_ROFI_BINARY=rofi-wayland",
        ]

    def test_unknown_field(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        with pytest.raises(ValueError, match="volume"):
            write_user_settings({"volume": 11})
        assert not (tmp_path / "music-selection" / ".env").exists()

    def test_invalid_value_writes_nothing(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        with pytest.raises(ValidationError):
            write_user_settings({"mpd_port": 0})
        assert not (tmp_path / "music-selection" / ".env").exists()


class TestDoctorRun:
    def test_all_checks_pass(self, monkeypatch):
        monkeypatch.setattr(doctor, "check_mpd", lambda settings: (True, "MPD 0.23.5 at localhost:6600"))
        monkeypatch.setattr(doctor.shutil, "which", lambda name: f"/usr/bin/{name}")

        result = runner.invoke(cli_main.app, ["doctor", "run"])

        assert result.exit_code == 0, result.output
        assert "MPD connection" in result.output
        assert "0.23.5" in result.output

    def test_missing_mpc_fails(self, monkeypatch):
        monkeypatch.setattr(doctor, "check_mpd", lambda settings: (True, "MPD 0.23.5"))
        monkeypatch.setattr(
            doctor.shutil, "which", lambda name: None if name == "mpc" else f"/usr/bin/{name}"
        )

        result = runner.invoke(cli_main.app, ["doctor", "run"])

        assert result.exit_code == 1
        assert "FAIL" in result.output

    def test_unreachable_mpd_fails(self, monkeypatch):
        monkeypatch.setattr(doctor.shutil, "which", lambda name: f"/usr/bin/{name}")

        result = runner.invoke(cli_main.app, ["--host", "127.0.0.1", "--port", "1", "doctor", "run"])

        assert result.exit_code == 1
        assert "MUSIC_SELECTION_MPD_HOST" in result.output


class TestDoctorConfigure:
    def test_prompts_and_writes_env(self, tmp_path: Path):
        result = runner.invoke(
            cli_main.app,
            ["doctor", "configure"],
            input="music.lan\n6601\n/q\n",
            env={"XDG_CONFIG_HOME": str(tmp_path)},
        )

        assert result.exit_code == 0, result.output
        lines = (tmp_path / "music-selection" / ".env").read_text(encoding="utf-8").splitlines()
        assert "MUSIC_SELECTION_MPD_HOST=music.lan" in lines
        assert "MUSIC_SELECTION_MPD_PORT=6601" in lines
        assert "MUSIC_SELECTION_QUARANTINE_PATH=/q" in lines

    def test_rejects_out_of_range_port(self, tmp_path: Path):
        result = runner.invoke(
            cli_main.app,
            ["doctor", "configure"],
            input="music.lan\n0\n/q\n",
            env={"XDG_CONFIG_HOME": str(tmp_path)},
        )

        assert result.exit_code == 2
        assert not (tmp_path / "music-selection" / ".env").exists()
