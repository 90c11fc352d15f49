from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from shop_manager.config import build_config

SHOP_KEYS = (
    "SHOP_DB_PATH",
    "SHOP_OUTPUT_DIR",
    "SHOP_SMTP_HOST",
    "SHOP_SMTP_PORT",
    "SHOP_SMTP_USER",
    "SHOP_SMTP_PASSWORD",
    "SHOP_SMTP_SENDER",
    "SHOP_SMTP_STARTTLS",
    "SHOP_SMTP_TIMEOUT",
    "SHOP_EMAIL_ENABLED",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in SHOP_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults(tmp_path: Path) -> None:
    (tmp_path / "README.md").write_text("marker", encoding="utf-8")
    config = build_config(script_dir=str(tmp_path))
    assert config.db_path == str(tmp_path / "var" / "shopdb" / "shop.sqlite3")
    assert config.output_dir == str(tmp_path)
    assert (config.smtp_host, config.smtp_port) == ("localhost", 25)
    assert config.smtp_user is None and config.smtp_password is None
    assert config.email_enabled is True
    assert config.smtp_starttls is False


def test_dotenv_file_found_from_subdirectory(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        "# shop settings\n"
        "SHOP_SMTP_HOST=sandbox.example.test\n"
        "SHOP_SMTP_PORT=2525\n"
        "SHOP_SMTP_USER='mailer'\n"
        'SHOP_SMTP_PASSWORD="p@ss word"\n',
        encoding="utf-8",
    )
    sub = tmp_path / "work" / "deeper"
    sub.mkdir(parents=True)
    config = build_config(script_dir=str(sub))
    assert config.smtp_host == "sandbox.example.test"
    assert config.smtp_port == 2525
    assert config.smtp_user == "mailer"
    assert config.smtp_password == "p@ss word"


def test_environment_beats_dotenv_and_args_beat_both(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / ".env").write_text("SHOP_SMTP_HOST=from-dotenv\nSHOP_OUTPUT_DIR=from-dotenv\n", encoding="utf-8")
    monkeypatch.setenv("SHOP_SMTP_HOST", "from-env")
    config = build_config(script_dir=str(tmp_path))
    assert config.smtp_host == "from-env"
    assert config.output_dir.endswith("from-dotenv")

    args = argparse.Namespace(smtp_host="from-args", output_dir=str(tmp_path / "exports"), no_email=False)
    config = build_config(args, script_dir=str(tmp_path))
    assert config.smtp_host == "from-args"
    assert config.output_dir == str(tmp_path / "exports")


def test_email_can_be_disabled(tmp_path: Path, monkeypatch) -> None:
    assert build_config(argparse.Namespace(no_email=True), script_dir=str(tmp_path)).email_enabled is False
    monkeypatch.setenv("SHOP_EMAIL_ENABLED", "false")
    assert build_config(script_dir=str(tmp_path)).email_enabled is False
    monkeypatch.delenv("SHOP_EMAIL_ENABLED")
    monkeypatch.setenv("SHOP_SMTP_HOST", "")
    assert build_config(script_dir=str(tmp_path)).email_enabled is False


def test_bad_port_is_fatal(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("SHOP_SMTP_PORT", "twenty-five")
    with pytest.raises(SystemExit):
        build_config(script_dir=str(tmp_path))
