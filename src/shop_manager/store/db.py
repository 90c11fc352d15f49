from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional, List

from ..errors import StoreError
from ..logging import get_logger
from ..paths import find_project_root, var_dir
from .constants import DEFAULT_DB_FILENAME, DEFAULT_DB_FOLDER
from .models import Client, Order, Product


LOG = get_logger("store-db")


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS products (
  id           INTEGER PRIMARY KEY AUTOINCREMENT,
  title        TEXT NOT NULL,
  description  TEXT,
  price        REAL NOT NULL CHECK(price >= 0),
  quantity     INTEGER NOT NULL,
  active       INTEGER NOT NULL DEFAULT 1
);

CREATE TABLE IF NOT EXISTS clients (
  id           INTEGER PRIMARY KEY AUTOINCREMENT,
  first_name   TEXT NOT NULL,
  last_name    TEXT NOT NULL,
  phone        TEXT,
  address      TEXT,
  email        TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS orders (
  id           INTEGER PRIMARY KEY AUTOINCREMENT,
  client_id    INTEGER NOT NULL REFERENCES clients(id),
  product_id   INTEGER NOT NULL REFERENCES products(id),
  quantity     INTEGER NOT NULL,
  price        REAL NOT NULL,
  order_date   TEXT NOT NULL       -- "YYYY-MM-DD HH:MM:SS"
);

CREATE INDEX IF NOT EXISTS idx_products_active ON products(active);
CREATE INDEX IF NOT EXISTS idx_orders_client   ON orders(client_id);
CREATE INDEX IF NOT EXISTS idx_orders_product  ON orders(product_id);
"""

COUNTABLE_TABLES = ("products", "clients", "orders")


class ShopDatabase:
    """SQLite-backed store for products, clients and orders.

    - Defaults to `<repo-root>/var/shopdb/shop.sqlite3` when no path is given.
    - Ensures schema on construction; a failure there is fatal to the caller.
    - Every statement binds values positionally; sqlite3 errors surface as StoreError.
    """

    def __init__(self, db_path: Optional[str] = None, *, root_dir: Optional[str] = None) -> None:
        if db_path is None:
            db_path = os.path.join(var_dir(find_project_root(root_dir)), DEFAULT_DB_FOLDER, DEFAULT_DB_FILENAME)
        folder = os.path.dirname(os.path.abspath(db_path))
        os.makedirs(folder, exist_ok=True)
        self.db_path = os.path.abspath(db_path)
        LOG.info(f"Shop DB path: {self.db_path}")
        self.ensure_schema()

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as exc:
            raise StoreError(f"Could not open database {self.db_path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA foreign_keys = ON;")
            yield conn
        except (sqlite3.Error, OverflowError) as exc:
            # OverflowError: an int outside the 64-bit range reached a bound parameter
            conn.rollback()
            LOG.error(f"Database statement failed: {exc}")
            raise StoreError(str(exc)) from exc
        finally:
            conn.close()

    def ensure_schema(self) -> None:
        """Create the three tables if absent; safe to call on every startup."""
        with self.connect() as conn:
            cur = conn.cursor()
            LOG.info("Ensuring shop DB schema is present")
            cur.executescript(SCHEMA_SQL)
            conn.commit()
            LOG.info("Shop DB schema ensured.")

    # --------------- Products ---------------
    def insert_product(self, product: Product) -> int:
        with self.connect() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO products (title, description, price, quantity, active)
                VALUES (?, ?, ?, ?, ?)
                RETURNING id;
                """,
                (product.title, product.description, product.price, product.quantity, int(product.active)),
            )
            row = cur.fetchone()
            conn.commit()
            return int(row[0])

    def update_product(self, product_id: int, title: str, description: str, price: float, quantity: int) -> int:
        """Overwrite the editable columns; returns affected rows (0 for an unknown id)."""
        with self.connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "UPDATE products SET title = ?, description = ?, price = ?, quantity = ? WHERE id = ?;",
                (title, description, price, quantity, product_id),
            )
            conn.commit()
            return cur.rowcount

    def deactivate_product(self, product_id: int) -> int:
        with self.connect() as conn:
            cur = conn.cursor()
            cur.execute("UPDATE products SET active = 0 WHERE id = ?;", (product_id,))
            conn.commit()
            return cur.rowcount

    def fetch_products(self, *, active_only: bool = False) -> List[Product]:
        sql = "SELECT id, title, description, price, quantity, active FROM products"
        if active_only:
            sql += " WHERE active = 1"
        with self.connect() as conn:
            cur = conn.cursor()
            cur.execute(sql + " ORDER BY id;")
            return [
                Product(
                    product_id=row["id"],
                    title=row["title"],
                    description=row["description"],
                    price=row["price"],
                    quantity=row["quantity"],
                    active=bool(row["active"]),
                )
                for row in cur.fetchall()
            ]

    def product_exists(self, product_id: int) -> bool:
        with self.connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT EXISTS(SELECT 1 FROM products WHERE id = ?);", (product_id,))
            return bool(cur.fetchone()[0])

    def fetch_product_price(self, product_id: int) -> Optional[float]:
        with self.connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT price FROM products WHERE id = ?;", (product_id,))
            row = cur.fetchone()
            return float(row["price"]) if row is not None else None

    # --------------- Clients ---------------
    def insert_client(self, client: Client) -> int:
        with self.connect() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO clients (first_name, last_name, phone, address, email)
                VALUES (?, ?, ?, ?, ?)
                RETURNING id;
                """,
                (client.first_name, client.last_name, client.phone, client.address, client.email),
            )
            row = cur.fetchone()
            conn.commit()
            return int(row[0])

    def update_client(self, client: Client) -> int:
        with self.connect() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                UPDATE clients
                SET first_name = ?, last_name = ?, phone = ?, address = ?, email = ?
                WHERE id = ?;
                """,
                (client.first_name, client.last_name, client.phone, client.address, client.email, client.client_id),
            )
            conn.commit()
            return cur.rowcount

    @staticmethod
    def _row_to_client(row: sqlite3.Row) -> Client:
        return Client(
            client_id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            phone=row["phone"],
            address=row["address"],
            email=row["email"],
        )

    def fetch_clients(self) -> List[Client]:
        with self.connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT id, first_name, last_name, phone, address, email FROM clients ORDER BY id;")
            return [self._row_to_client(row) for row in cur.fetchall()]

    def fetch_client(self, client_id: int) -> Optional[Client]:
        with self.connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "SELECT id, first_name, last_name, phone, address, email FROM clients WHERE id = ?;",
                (client_id,),
            )
            row = cur.fetchone()
            return self._row_to_client(row) if row is not None else None

    def client_exists(self, client_id: int) -> bool:
        with self.connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT EXISTS(SELECT 1 FROM clients WHERE id = ?);", (client_id,))
            return bool(cur.fetchone()[0])

    # --------------- Orders ---------------
    def insert_order(self, order: Order) -> int:
        with self.connect() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO orders (client_id, product_id, quantity, price, order_date)
                VALUES (?, ?, ?, ?, ?)
                RETURNING id;
                """,
                (order.client_id, order.product_id, order.quantity, order.price, order.order_date),
            )
            row = cur.fetchone()
            conn.commit()
            return int(row[0])

    def fetch_orders(self) -> List[Order]:
        with self.connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT id, client_id, product_id, quantity, price, order_date FROM orders ORDER BY id;")
            return [
                Order(
                    order_id=row["id"],
                    client_id=row["client_id"],
                    product_id=row["product_id"],
                    quantity=row["quantity"],
                    price=row["price"],
                    order_date=row["order_date"],
                )
                for row in cur.fetchall()
            ]

    def count_rows(self, table: str) -> int:
        if table not in COUNTABLE_TABLES:
            raise ValueError(f"Unsupported table: {table}")
        with self.connect() as conn:
            cur = conn.cursor()
            cur.execute(f"SELECT COUNT(*) AS count FROM {table};")
            return int(cur.fetchone()["count"])
