from __future__ import annotations

import builtins
import csv
from pathlib import Path

import pytest

from shop_manager.cli import main as cli_main
from shop_manager.store import Product, ShopDatabase


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path: Path):
    for key in ("SHOP_DB_PATH", "SHOP_OUTPUT_DIR", "SHOP_SMTP_HOST", "SHOP_EMAIL_ENABLED"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def test_init_prints_database_path(tmp_path: Path, capsys) -> None:
    db_path = tmp_path / "data" / "shop.sqlite3"
    assert cli_main.main(["--db-path", str(db_path), "init"]) == 0
    assert capsys.readouterr().out.strip() == str(db_path)
    assert db_path.exists()


def test_export_subcommand_writes_csv(tmp_path: Path, capsys) -> None:
    db_path = tmp_path / "shop.sqlite3"
    ShopDatabase(str(db_path)).insert_product(Product(None, "Widget", "A widget", 10.0, 5))
    out = tmp_path / "exports"
    code = cli_main.main(["--db-path", str(db_path), "--output-dir", str(out), "export", "products"])
    assert code == 0
    assert capsys.readouterr().out.strip() == str(out / "products.csv")
    with open(out / "products.csv", encoding="utf-8", newline="") as f:
        assert list(csv.reader(f))[1] == ["1", "Widget", "A widget", "10.0", "5"]


def test_default_command_runs_shell(tmp_path: Path, monkeypatch, capsys) -> None:
    answers = iter(["2", "12"])
    monkeypatch.setattr(builtins, "input", lambda _prompt="": next(answers))
    code = cli_main.main(["--db-path", str(tmp_path / "shop.sqlite3"), "--no-email"])
    assert code == 0
    out = capsys.readouterr().out
    assert "List of Products:" in out
    assert "Exiting program." in out


def test_unopenable_database_is_fatal(tmp_path: Path) -> None:
    broken = tmp_path / "broken.sqlite3"
    broken.write_bytes(b"not a database" * 200)
    with pytest.raises(SystemExit) as excinfo:
        cli_main.main(["--db-path", str(broken), "init"])
    assert excinfo.value.code == 1


def test_export_into_a_regular_file_fails_with_code_one(tmp_path: Path, capsys) -> None:
    db_path = tmp_path / "shop.sqlite3"
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("occupied", encoding="utf-8")
    code = cli_main.main(["--db-path", str(db_path), "--output-dir", str(blocker), "export", "products"])
    assert code == 1
    assert capsys.readouterr().out == ""
    assert blocker.read_text(encoding="utf-8") == "occupied"
