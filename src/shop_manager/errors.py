"""Exception hierarchy shared by the managers and the shell."""

from __future__ import annotations


class ShopError(Exception):
    """Base class for every failure the menu reports and survives."""


class ValidationError(ShopError, ValueError):
    """Operator input did not pass a field check; the prompt repeats."""


class PromptAborted(ShopError):
    """Input ended while a prompt was waiting for a value."""


class NotFoundError(ShopError):
    def __init__(self, kind: str, ident: int) -> None:
        super().__init__(f"{kind} not found.")
        self.kind = kind
        self.ident = ident


class StoreError(ShopError):
    """The database rejected or failed a statement."""


class DocumentError(ShopError):
    """The order receipt could not be rendered or written."""


class DeliveryError(ShopError):
    """The confirmation email could not be handed to the relay."""


class ExportError(ShopError):
    """A CSV export file could not be written."""
