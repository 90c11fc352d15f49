"""Persistence layer for the shop.

Modules:
- db: DB location, schema, and parameterized CRUD helpers
- models: Dataclasses for products, clients and orders
- constants: File names and CSV headers
"""

from .db import ShopDatabase
from .models import Client, Order, Product

__all__ = [
    "ShopDatabase",
    "Client",
    "Order",
    "Product",
]
