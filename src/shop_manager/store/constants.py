from __future__ import annotations

from typing import Tuple

DEFAULT_DB_FOLDER = "shopdb"
DEFAULT_DB_FILENAME = "shop.sqlite3"

ORDER_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PRODUCTS_CSV = "products.csv"
CLIENTS_CSV = "clients.csv"
ORDERS_CSV = "orders.csv"

PRODUCT_HEADERS: Tuple[str, ...] = ("ID", "Title", "Description", "Price", "Quantity")
CLIENT_HEADERS: Tuple[str, ...] = ("ID", "First Name", "Last Name", "Phone", "Address", "Email")
ORDER_HEADERS: Tuple[str, ...] = ("ID", "Client ID", "Product ID", "Quantity", "Price", "Order Date")
