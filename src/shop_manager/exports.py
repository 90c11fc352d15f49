"""CSV exports of the three shop tables."""

from __future__ import annotations

import csv
import os
from typing import Iterable, Sequence

from .errors import ExportError
from .logging import get_logger
from .paths import ensure_dir
from .store import ShopDatabase
from .store.constants import (
    CLIENT_HEADERS,
    CLIENTS_CSV,
    ORDER_HEADERS,
    ORDERS_CSV,
    PRODUCT_HEADERS,
    PRODUCTS_CSV,
)

LOG = get_logger("exports")


def _target(output_dir: str, filename: str) -> str:
    try:
        return os.path.join(ensure_dir(output_dir), filename)
    except OSError as exc:
        raise ExportError(f"Could not use output directory {output_dir}: {exc}") from exc


def write_csv(path: str, headers: Sequence[str], rows: Iterable[Sequence[object]]) -> int:
    """Overwrite `path` with a header row and the stringified rows; returns the row count."""
    count = 0
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(headers)
            for row in rows:
                writer.writerow([str(value) for value in row])
                count += 1
    except OSError as exc:
        raise ExportError(f"Could not write {path}: {exc}") from exc
    LOG.info(f"Wrote {count} row(s) to {path}")
    return count


def export_products(db: ShopDatabase, output_dir: str) -> str:
    """All products, inactive ones included."""
    path = _target(output_dir, PRODUCTS_CSV)
    rows = ((p.product_id, p.title, p.description, p.price, p.quantity) for p in db.fetch_products())
    write_csv(path, PRODUCT_HEADERS, rows)
    return path


def export_clients(db: ShopDatabase, output_dir: str) -> str:
    path = _target(output_dir, CLIENTS_CSV)
    rows = ((c.client_id, c.first_name, c.last_name, c.phone, c.address, c.email) for c in db.fetch_clients())
    write_csv(path, CLIENT_HEADERS, rows)
    return path


def export_orders(db: ShopDatabase, output_dir: str) -> str:
    path = _target(output_dir, ORDERS_CSV)
    rows = ((o.order_id, o.client_id, o.product_id, o.quantity, o.price, o.order_date) for o in db.fetch_orders())
    write_csv(path, ORDER_HEADERS, rows)
    return path
