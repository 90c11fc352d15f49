"""Numbered menu that dispatches to the catalog, client and order managers."""

from __future__ import annotations

from typing import Callable, Dict

from ..catalog import CatalogManager
from ..clients import ClientManager
from ..errors import PromptAborted
from ..logging import get_logger
from ..orders import OrderWorkflow
from ..prompts import Console

LOG = get_logger("cli-shell")

EXIT_CHOICE = 12

MENU_ITEMS = (
    "Add Product",
    "Display Products",
    "Modify Product",
    "Deactivate Product",
    "Export Products to CSV",
    "Add Client",
    "Display Clients",
    "Modify Client",
    "Export Clients to CSV",
    "Make an Order",
    "Export Orders to CSV",
    "Exit",
)


class InteractiveShell:
    def __init__(
        self,
        console: Console,
        catalog: CatalogManager,
        clients: ClientManager,
        orders: OrderWorkflow,
    ) -> None:
        self.console = console
        self._actions: Dict[int, Callable[[], object]] = {
            1: catalog.add_product,
            2: catalog.list_active_products,
            3: catalog.modify_product,
            4: catalog.deactivate_product,
            5: catalog.export_products_to_csv,
            6: clients.add_client,
            7: clients.list_clients,
            8: clients.modify_client,
            9: clients.export_clients_to_csv,
            10: orders.place_order,
            11: orders.export_orders_to_csv,
        }

    def print_menu(self) -> None:
        self.console.echo("Menu:")
        for number, label in enumerate(MENU_ITEMS, start=1):
            self.console.echo(f"{number}. {label}")

    def run(self) -> int:
        while True:
            self.print_menu()
            try:
                raw = self.console.read("Choose an option:")
            except PromptAborted:
                # stdin closed: leave the same way option 12 does
                break
            try:
                choice = int(raw.strip())
            except ValueError:
                choice = 0
            LOG.debug(f"Menu choice: {choice}")

            if choice == EXIT_CHOICE:
                break
            action = self._actions.get(choice)
            if action is None:
                self.console.echo("Invalid option. Please try again.")
                continue
            action()

        self.console.echo("Exiting program.")
        return 0
