"""Product catalog operations behind menu entries 1-5."""

from __future__ import annotations

from typing import List

from .errors import ShopError
from .exports import export_products
from .logging import get_logger
from .prompts import Console
from .store import Product, ShopDatabase
from .store.constants import PRODUCT_HEADERS
from .validation import non_empty, parse_int, parse_price

LOG = get_logger("catalog")


class CatalogManager:
    """Add, list, modify, deactivate and export products.

    Each public method reports its own outcome on the console and returns to the
    caller; storage failures are printed, never raised.
    """

    def __init__(self, db: ShopDatabase, console: Console, output_dir: str) -> None:
        self.db = db
        self.console = console
        self.output_dir = output_dir

    def _ask_fields(self):
        title = self.console.ask("Enter product title:", non_empty("Title"))
        description = self.console.ask("Enter product description:", non_empty("Description"))
        price = self.console.ask("Enter product price:", parse_price)
        quantity = self.console.ask("Enter product quantity:", parse_int("Quantity", minimum=0))
        return title, description, price, quantity

    def add_product(self) -> None:
        try:
            title, description, price, quantity = self._ask_fields()
            product_id = self.db.insert_product(Product(None, title, description, price, quantity, True))
        except ShopError as exc:
            self._report(exc)
            return
        LOG.info(f"Inserted product id={product_id} price={price}")
        self.console.echo("Product added successfully.")

    def list_active_products(self) -> List[Product]:
        try:
            products = self.db.fetch_products(active_only=True)
        except ShopError as exc:
            self._report(exc)
            return []
        self.console.echo("List of Products:")
        self.console.table(
            PRODUCT_HEADERS,
            [(p.product_id, p.title, p.description, f"{p.price:.2f}", p.quantity) for p in products],
        )
        return products

    def modify_product(self) -> None:
        try:
            product_id = self.console.ask("Enter product ID to modify:", parse_int("Product ID"))
            title, description, price, quantity = self._ask_fields()
            affected = self.db.update_product(product_id, title, description, price, quantity)
        except ShopError as exc:
            self._report(exc)
            return
        if not affected:
            LOG.debug(f"Update matched no product with id={product_id}")
        self.console.echo("Product modified successfully.")

    def deactivate_product(self) -> None:
        try:
            product_id = self.console.ask("Enter product ID to deactivate:", parse_int("Product ID"))
            affected = self.db.deactivate_product(product_id)
        except ShopError as exc:
            self._report(exc)
            return
        if not affected:
            LOG.debug(f"Deactivate matched no product with id={product_id}")
        self.console.echo("Product deactivated successfully.")

    def export_products_to_csv(self) -> None:
        try:
            path = export_products(self.db, self.output_dir)
        except ShopError as exc:
            self._report(exc)
            return
        self.console.echo(f"Products exported to CSV successfully ({path}).")

    def _report(self, exc: ShopError) -> None:
        LOG.info(f"Catalog operation abandoned: {exc!r}")
        self.console.report(exc)
