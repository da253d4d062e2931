"""
Inventory Tracker - An interactive in-memory product inventory

Features:
- Register general, electronics and grocery products
- Stable sorting by name, price or quantity
- Token-based name search and stock statistics
- CSV export with a transaction log of every change
- Interactive menu and a local API server
"""

__version__ = "0.1.0"

from .catalog import Catalog, Statistics
from .exporter import ExportRow, read_csv, write_csv
from .items import (
    Electronics,
    General,
    Grocery,
    Item,
    ItemDetails,
    items_constructed,
    render_row,
)
from .validation import validate_items

__all__ = [
    "Catalog",
    "Statistics",
    "ExportRow",
    "read_csv",
    "write_csv",
    "Electronics",
    "General",
    "Grocery",
    "Item",
    "ItemDetails",
    "items_constructed",
    "render_row",
    "validate_items",
]
