from __future__ import annotations

import io
import os
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import pytest

# Ensure src/ is importable when tests run from repo root
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from shop_manager.prompts import Console  # noqa: E402
from shop_manager.store import ShopDatabase  # noqa: E402


class ScriptedConsole(Console):
    """Console fed from a list of lines; running out behaves like a closed stdin."""

    def __init__(self, lines: Sequence[str] = ()) -> None:
        self.output = io.StringIO()
        self.pending: List[str] = list(lines)
        super().__init__(reader=self._next, stream=self.output)

    def _next(self, _prompt: str) -> str:
        if not self.pending:
            raise EOFError
        return self.pending.pop(0)

    def feed(self, *lines: str) -> "ScriptedConsole":
        self.pending.extend(lines)
        return self

    @property
    def text(self) -> str:
        return self.output.getvalue()


class RecordingMailer:
    def __init__(self, error: Optional[Exception] = None) -> None:
        self.sent = []
        self.error = error

    def send(self, recipient, subject, body, attachment_path=None) -> None:
        if self.error is not None:
            raise self.error
        with open(attachment_path, "rb") as f:
            head = f.read(5)
        self.sent.append(
            {"to": recipient, "subject": subject, "body": body, "attachment": attachment_path, "head": head}
        )


@pytest.fixture
def db(tmp_path: Path) -> ShopDatabase:
    return ShopDatabase(str(tmp_path / "shop.sqlite3"))


@pytest.fixture
def console() -> ScriptedConsole:
    return ScriptedConsole()


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def make_console():
    def _make(*lines: str) -> ScriptedConsole:
        return ScriptedConsole(lines)

    return _make


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def failing_mailer() -> RecordingMailer:
    from shop_manager.errors import DeliveryError

    return RecordingMailer(error=DeliveryError("Could not send email: relay refused"))
