"""Stock repository contract and its errors."""

from __future__ import annotations

from abc import ABC, abstractmethod

from gorder.common.entities import Item


class NotFoundError(LookupError):
    """Some requested items are not in stock."""

    def __init__(self, missing: list[str], found: list[Item] | None = None):
        super().__init__(f"these items not found in stock: {','.join(missing)}")
        self.missing = list(missing)
        self.found = list(found or [])


class Repository(ABC):
    """Storage of stock items."""

    @abstractmethod
    def get_items(self, ids: list[str]) -> list[Item]: ...