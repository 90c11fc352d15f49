from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class Product:
    product_id: Optional[int]
    title: str
    description: str
    price: float
    quantity: int
    active: bool = True


@dataclass
class Client:
    client_id: Optional[int]
    first_name: str
    last_name: str
    phone: str
    address: str
    email: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass
class Order:
    order_id: Optional[int]
    client_id: int
    product_id: int
    quantity: int
    price: float      # unit price x quantity at order time
    order_date: str   # YYYY-MM-DD HH:MM:SS
