"""Client roster operations behind menu entries 6-9."""

from __future__ import annotations

from typing import List, Optional

from .errors import ShopError
from .exports import export_clients
from .logging import get_logger
from .prompts import Console
from .store import Client, ShopDatabase
from .store.constants import CLIENT_HEADERS
from .validation import non_empty, parse_email, parse_int, parse_phone

LOG = get_logger("clients")


class ClientManager:
    def __init__(self, db: ShopDatabase, console: Console, output_dir: str) -> None:
        self.db = db
        self.console = console
        self.output_dir = output_dir

    def _ask_client(self, client_id: Optional[int] = None) -> Client:
        ask = self.console.ask
        return Client(
            client_id=client_id,
            first_name=ask("Enter client first name:", non_empty("First name")),
            last_name=ask("Enter client last name:", non_empty("Last name")),
            phone=ask("Enter client phone number:", parse_phone),
            address=ask("Enter client address:", non_empty("Address")),
            email=ask("Enter client email:", parse_email),
        )

    def add_client(self) -> None:
        # Duplicate emails are accepted.
        try:
            client_id = self.db.insert_client(self._ask_client())
        except ShopError as exc:
            self._report(exc)
            return
        LOG.info(f"Inserted client id={client_id}")
        self.console.echo("Client added successfully.")

    def list_clients(self) -> List[Client]:
        try:
            clients = self.db.fetch_clients()
        except ShopError as exc:
            self._report(exc)
            return []
        self.console.echo("List of Clients:")
        self.console.table(
            CLIENT_HEADERS,
            [(c.client_id, c.first_name, c.last_name, c.phone, c.address, c.email) for c in clients],
        )
        return clients

    def modify_client(self) -> None:
        try:
            client_id = self.console.ask("Enter client ID to modify:", parse_int("Client ID"))
            affected = self.db.update_client(self._ask_client(client_id))
        except ShopError as exc:
            self._report(exc)
            return
        if not affected:
            LOG.debug(f"Update matched no client with id={client_id}")
        self.console.echo("Client modified successfully.")

    def export_clients_to_csv(self) -> None:
        try:
            path = export_clients(self.db, self.output_dir)
        except ShopError as exc:
            self._report(exc)
            return
        self.console.echo(f"Clients exported to CSV successfully ({path}).")

    def _report(self, exc: ShopError) -> None:
        LOG.info(f"Client operation abandoned: {exc!r}")
        self.console.report(exc)
