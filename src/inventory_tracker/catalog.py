#!/usr/bin/env python3
"""
In-memory inventory catalog.

The catalog keeps items in an explicit order (the order they were added,
until one of the sort operations rearranges them), an append-only
transaction log of human-readable entries, and the set of known category
names. Sorting is stable, so items with equal keys keep their previous
relative order.
"""
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from . import exporter
from .items import CURRENCY, Item, name_key

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = ("General", "Electronics", "Grocery")


@dataclass(frozen=True)
class Statistics:
    count: int
    total_value: float
    total_quantity: int

    def format(self) -> str:
        return (
            "=== Inventory Statistics ===\n"
            f"Total Products: {self.count}\n"
            f"Total Value: {CURRENCY}{self.total_value:.2f}\n"
            f"Total Quantity: {self.total_quantity}\n"
        )


class Catalog:
    """Ordered collection of items with a transaction log."""

    def __init__(self, categories: Tuple[str, ...] = DEFAULT_CATEGORIES):
        self._items: List[Item] = []
        self._log: List[str] = []
        self._categories: List[str] = list(categories)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items))

    @property
    def items(self) -> Tuple[Item, ...]:
        """Snapshot of the items in catalog order."""
        return tuple(self._items)

    @property
    def transaction_log(self) -> Tuple[str, ...]:
        return tuple(self._log)

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(self._categories)

    def _record(self, entry: str) -> None:
        self._log.append(entry)
        logger.debug("catalog: %s", entry)

    def add(self, item: Item) -> None:
        self._items.append(item)
        self._record(f"Added: {item.name}")

    def remove(self, item_id: int) -> bool:
        """Remove the first item with ``item_id``. Returns False if there is none."""
        for index, item in enumerate(self._items):
            if item.id == item_id:
                del self._items[index]
                self._record(f"Removed: {item.name}")
                return True
        return False

    def find_by_id(self, item_id: int) -> Optional[Item]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def sort_by_name(self) -> None:
        self._items.sort(key=name_key)
        self._record("Sorted by name")

    def sort_by_price(self) -> None:
        self._items.sort(key=lambda item: item.price)
        self._record("Sorted by price")

    def sort_by_quantity(self) -> None:
        self._items.sort(key=lambda item: item.quantity)
        self._record("Sorted by quantity")

    def search_by_name(self, keyword: str) -> List[Item]:
        """
        Find items with a name token containing ``keyword``.

        Matching is case-insensitive and done per whitespace-separated token,
        so "vel" matches "Red Velvet Cake" but "edvet" does not.
        """
        needle = keyword.lower()
        return [
            item for item in self._items
            if any(needle in token for token in item.name.lower().split())
        ]

    def statistics(self) -> Statistics:
        return Statistics(
            count=len(self._items),
            total_value=sum((item.total_value() for item in self._items), 0.0),
            total_quantity=sum(item.quantity for item in self._items),
        )

    def export(self, path: Union[str, Path]) -> None:
        """Write the catalog to ``path`` as CSV. Raises OSError if it cannot be written."""
        exporter.write_csv(self._items, path)
        self._record(f"Exported to CSV: {path}")

    def clear(self) -> None:
        self._items.clear()
        self._record("Cleared all products")

    def grid(self, cols: int) -> List[List[Optional[Item]]]:
        """Lay the items out row-major in ``cols`` columns; unused cells are None."""
        if cols < 1:
            raise ValueError(f"cols must be at least 1, got {cols}")

        rows = math.ceil(len(self._items) / cols)
        grid: List[List[Optional[Item]]] = [[None] * cols for _ in range(rows)]
        for index, item in enumerate(self._items):
            grid[index // cols][index % cols] = item
        return grid
