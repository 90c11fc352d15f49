"""Console I/O for the interactive shell.

`Console.ask` is the single prompt/validate/repeat loop used by every manager:
it keeps asking until the parser accepts the line or input runs out, in which
case `PromptAborted` unwinds the current operation back to the menu.
"""

from __future__ import annotations

import sys
from typing import Callable, Optional, Sequence, TextIO, TypeVar

from .errors import PromptAborted, ShopError, ValidationError

T = TypeVar("T")


class Console:
    def __init__(
        self,
        reader: Optional[Callable[[str], str]] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self._reader = reader or input
        self._stream = stream or sys.stdout

    def echo(self, message: str = "") -> None:
        self._stream.write(f"{message}\n")
        self._stream.flush()

    def read(self, prompt: str) -> str:
        try:
            return self._reader(f"{prompt} ")
        except EOFError:
            raise PromptAborted(prompt) from None

    def ask(self, prompt: str, parse: Callable[[str], T]) -> T:
        while True:
            raw = self.read(prompt).strip()
            try:
                return parse(raw)
            except ValidationError as exc:
                self.echo(str(exc))

    def report(self, exc: ShopError) -> None:
        """Print the outcome of an abandoned operation."""
        if isinstance(exc, PromptAborted):
            self.echo("Operation cancelled.")
        else:
            self.echo(f"Error: {exc}")

    def table(self, headers: Sequence[str], rows: Sequence[Sequence[object]]) -> None:
        self.echo(format_table(headers, rows))


def format_table(headers: Sequence[str], rows: Sequence[Sequence[object]]) -> str:
    """Render rows as pipe-separated columns padded to the widest cell."""
    cells = [[str(h) for h in headers], ["-" * len(str(h)) for h in headers]]
    cells.extend([str(v) for v in row] for row in rows)
    widths = [max(len(line[i]) for line in cells) for i in range(len(headers))]
    lines = [" |".join(cell.ljust(widths[i]) for i, cell in enumerate(line)).rstrip() for line in cells]
    return "\n".join(lines)

