"""Wire entities shared between the order, stock and payment services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass
class Item:
    """A stock item as carried on the wire."""

    id: str = ""
    name: str = ""
    quantity: int = 0
    price_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "price_id": self.price_id,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Item":
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            quantity=int(data.get("quantity", 0)),
            price_id=str(data.get("price_id", "")),
        )


@dataclass
class ItemWithQuantity:
    """An item reference together with a requested quantity."""

    id: str = ""
    quantity: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "quantity": self.quantity}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ItemWithQuantity":
        return cls(id=str(data.get("id", "")), quantity=int(data.get("quantity", 0)))


@dataclass
class OrderPayload:
    """An order as exchanged between services."""

    id: str = ""
    customer_id: str = ""
    status: str = ""
    payment_link: str = ""
    items: list[Item] | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "customer_id": self.customer_id,
            "status": self.status,
            "payment_link": self.payment_link,
            "items": None if self.items is None else [i.to_dict() for i in self.items],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OrderPayload":
        raw_items = data.get("items")
        return cls(
            id=str(data.get("id", "")),
            customer_id=str(data.get("customer_id", "")),
            status=str(data.get("status", "")),
            payment_link=str(data.get("payment_link", "")),
            items=None if raw_items is None else [Item.from_dict(i) for i in raw_items],
        )