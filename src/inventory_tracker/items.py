#!/usr/bin/env python3
"""
Catalog items and their category-specific variants.

An Item carries the common stock fields (id, name, price, quantity, weight,
unit, category) plus a variant describing what kind of product it is:
General, Electronics or Grocery. Variants are frozen dataclasses and the
display rules are dispatched on them with ``match``.
"""
import calendar
import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Union

DEFAULT_UNIT = "pcs"
DEFAULT_CATEGORY = "General"
CURRENCY = "₹"
EXPIRY_MONTHS = 6

_IMMUTABLE_FIELDS = frozenset({'id', 'name', 'variant'})

# Items ever constructed in this process, never decremented
_items_constructed = 0


def items_constructed() -> int:
    """Return how many items have been constructed since the process started."""
    return _items_constructed


def add_months(moment: datetime, months: int) -> datetime:
    """Shift a datetime by calendar months, clamping the day to the target month."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


@dataclass(frozen=True)
class General:
    label = "General"


@dataclass(frozen=True)
class Electronics:
    warranty_months: int
    brand: str

    label = "Electronics"


@dataclass(frozen=True)
class Grocery:
    expiry_date: datetime
    perishable: bool

    label = "Grocery"

    @classmethod
    def from_now(cls, perishable: bool, now: Optional[datetime] = None) -> "Grocery":
        """Grocery variant expiring EXPIRY_MONTHS after ``now``."""
        return cls(add_months(now or datetime.now(), EXPIRY_MONTHS), perishable)


Variant = Union[General, Electronics, Grocery]


@dataclass(eq=False)
class Item:
    """
    One catalog entry.

    ``id``, ``name`` and ``variant`` are fixed once constructed; the stock
    fields (quantity, price, weight, unit, category) may be updated in place.
    Items with a non-General variant always carry the variant's category label.
    """
    id: int
    name: str
    price: float
    quantity: int
    weight: float = 0.0
    unit: str = DEFAULT_UNIT
    category: str = DEFAULT_CATEGORY
    variant: Variant = field(default_factory=General)

    def __post_init__(self):
        global _items_constructed

        if not isinstance(self.variant, General):
            self.category = self.variant.label
        _items_constructed += 1

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _IMMUTABLE_FIELDS and name in self.__dict__:
            raise AttributeError(f"Item.{name} cannot be changed after construction")
        super().__setattr__(name, value)

    def __lt__(self, other: "Item") -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self.name.lower() < other.name.lower()

    @classmethod
    def electronics(cls, id: int, name: str, price: float, quantity: int,
                    warranty_months: int, brand: str, **fields) -> "Item":
        """Build an Electronics item. Any ``category`` passed in is overridden."""
        return cls(id, name, price, quantity,
                   variant=Electronics(warranty_months, brand), **fields)

    @classmethod
    def grocery(cls, id: int, name: str, price: float, quantity: int,
                weight: float, unit: str, perishable: bool,
                now: Optional[datetime] = None, **fields) -> "Item":
        """Build a Grocery item expiring six months from now."""
        return cls(id, name, price, quantity, weight, unit,
                   variant=Grocery.from_now(perishable, now), **fields)

    def total_value(self) -> float:
        return self.price * self.quantity

    def copy(self) -> "Item":
        """Independent duplicate. Copies are not counted as constructed items."""
        return copy.copy(self)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'quantity': self.quantity,
            'weight': self.weight,
            'unit': self.unit,
            'category': self.category,
            'total_value': self.total_value(),
        }
        match self.variant:
            case Electronics(warranty_months=warranty, brand=brand):
                data.update(warranty_months=warranty, brand=brand)
            case Grocery(expiry_date=expiry, perishable=perishable):
                data.update(expiry_date=expiry.isoformat(), perishable=perishable)
        return data


def name_key(item: Item) -> str:
    return item.name.lower()


def render_row(item: Item) -> str:
    """Fixed-width display row; the trailing columns depend on the variant."""
    head = f"{item.id:<5d} | {item.name:<20s} | {item.quantity:<5d} | {CURRENCY}{item.price:<10.2f}"

    match item.variant:
        case Electronics(warranty_months=warranty, brand=brand):
            return f"{head} | {brand} | {warranty} months"
        case Grocery(perishable=perishable):
            flag = "Perishable" if perishable else "Non-Perishable"
            return f"{head} | {item.weight:.2f} {item.unit} | {flag}"
        case _:
            return f"{head} | {item.weight:.2f} {item.unit}"


@dataclass(frozen=True)
class ItemDetails:
    """
    Supplier details captured for an item at a point in time.

    Library-only: neither the shell nor the API server records suppliers.
    The value copies the item's id and name and keeps no reference to it.
    """
    item_id: int
    item_name: str
    supplier: str
    added_at: datetime

    @classmethod
    def from_item(cls, item: Item, supplier: str, added_at: Optional[datetime] = None) -> "ItemDetails":
        return cls(item.id, item.name, supplier, added_at or datetime.now())
