"""Place an order: validate references, persist, render the receipt, email it."""

from __future__ import annotations

import os
from datetime import datetime
from typing import Callable, Optional

from ..errors import NotFoundError, ShopError
from ..exports import export_orders
from ..logging import get_logger
from ..prompts import Console
from ..store import Order, ShopDatabase
from ..store.constants import ORDER_DATE_FORMAT
from ..validation import parse_int
from .receipt import ReceiptRenderer

LOG = get_logger("orders-workflow")

CONFIRMATION_SUBJECT = "Order Confirmation"


def confirmation_body(first_name: str, order: Order) -> str:
    return (
        f"Dear {first_name},\n\n"
        "Thank you for your order.\n"
        f"Order ID: {order.order_id}\n"
        f"Client ID: {order.client_id}\n"
        f"Product ID: {order.product_id}\n"
        f"Quantity: {order.quantity}\n"
        f"Total Price: {order.price:.2f}\n\n"
        "Best regards,\n"
        "Customer Service\n"
    )


class OrderWorkflow:
    """Runs the order sequence once per `place_order` call.

    The order row is committed before the receipt and the email are produced;
    a later failure is reported but the row stays.

    `mailer` needs a `send(recipient, subject, body, attachment_path)` method;
    pass None to skip the email step.
    """

    def __init__(
        self,
        db: ShopDatabase,
        console: Console,
        output_dir: str,
        *,
        renderer: Optional[ReceiptRenderer] = None,
        mailer=None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.db = db
        self.console = console
        self.output_dir = output_dir
        self.renderer = renderer or ReceiptRenderer(output_dir)
        self.mailer = mailer
        self.clock = clock

    def place_order(self) -> Optional[Order]:
        ask = self.console.ask
        try:
            client_id = ask("Enter client ID:", parse_int("Client ID"))
            product_id = ask("Enter product ID:", parse_int("Product ID"))
            quantity = ask("Enter quantity:", parse_int("Quantity", minimum=1))
            order = self._record(client_id, product_id, quantity)
        except ShopError as exc:
            LOG.info(f"Order abandoned before insert: {exc!r}")
            self.console.report(exc)
            return None

        temp_path: Optional[str] = None
        try:
            _, temp_path = self.renderer.write(order)
            self.console.echo("Order PDF generated successfully.")
            self._send_confirmation(order, temp_path)
        except ShopError as exc:
            LOG.error(f"Order {order.order_id} stored but confirmation failed: {exc}")
            self.console.report(exc)
            self.console.echo(f"Order {order.order_id} was recorded without a complete confirmation.")
            return order
        finally:
            if temp_path:
                self._discard(temp_path)

        self.console.echo("Order placed successfully.")
        return order

    def _record(self, client_id: int, product_id: int, quantity: int) -> Order:
        if not self.db.client_exists(client_id):
            raise NotFoundError("Client", client_id)
        if not self.db.product_exists(product_id):
            raise NotFoundError("Product", product_id)
        unit_price = self.db.fetch_product_price(product_id)
        if unit_price is None:
            raise NotFoundError("Product", product_id)

        order = Order(
            order_id=None,
            client_id=client_id,
            product_id=product_id,
            quantity=quantity,
            price=unit_price * quantity,
            order_date=self.clock().strftime(ORDER_DATE_FORMAT),
        )
        order.order_id = self.db.insert_order(order)
        LOG.info(f"Inserted order id={order.order_id} total={order.price}")
        return order

    def _send_confirmation(self, order: Order, attachment_path: str) -> None:
        if self.mailer is None:
            self.console.echo("Email delivery is disabled; confirmation not sent.")
            return
        client = self.db.fetch_client(order.client_id)
        if client is None:
            raise NotFoundError("Client", order.client_id)
        self.mailer.send(
            client.email,
            CONFIRMATION_SUBJECT,
            confirmation_body(client.first_name, order),
            attachment_path,
        )
        self.console.echo("Order confirmation email sent successfully.")

    @staticmethod
    def _discard(path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            LOG.warning(f"Could not remove temporary receipt {path}: {exc}")

    def export_orders_to_csv(self) -> None:
        try:
            path = export_orders(self.db, self.output_dir)
        except ShopError as exc:
            LOG.info(f"Order export abandoned: {exc!r}")
            self.console.report(exc)
            return
        self.console.echo(f"Orders exported to CSV successfully ({path}).")
