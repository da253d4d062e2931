#!/usr/bin/env python3
"""
CSV export of the catalog.

The format is a header line followed by one ``id,name,quantity,price,weight,unit``
line per item. Fields are joined with plain commas and never quoted, so names
or units containing commas do not survive a round trip. Floats are written
with Python's ``repr`` (``1.5``, ``0.0``), which reads back to the same value.
"""
import logging
from pathlib import Path
from typing import Iterable, List, NamedTuple, Union

from .items import Item

logger = logging.getLogger(__name__)

HEADER = "ID,Name,Quantity,Price,Weight,Unit"


class ExportRow(NamedTuple):
    id: int
    name: str
    quantity: int
    price: float
    weight: float
    unit: str


def format_row(item: Item) -> str:
    return f"{item.id},{item.name},{item.quantity},{float(item.price)!r},{float(item.weight)!r},{item.unit}"


def format_csv(items: Iterable[Item]) -> str:
    lines = [HEADER]
    lines.extend(format_row(item) for item in items)
    return '\n'.join(lines) + '\n'


def write_csv(items: Iterable[Item], output_file: Union[str, Path]) -> None:
    """Write items to ``output_file``, overwriting it. Raises OSError on failure."""
    content = format_csv(items)
    with open(output_file, 'w', encoding='utf-8', newline='\n') as f:
        f.write(content)
    logger.info("Exported %d item(s) to %s", content.count('\n') - 1, output_file)


def parse_row(line: str, line_number: int) -> ExportRow:
    fields = line.split(',')
    if len(fields) != 6:
        raise ValueError(f"line {line_number}: expected 6 fields, got {len(fields)}")

    item_id, name, quantity, price, weight, unit = fields
    try:
        return ExportRow(int(item_id), name, int(quantity), float(price), float(weight), unit)
    except ValueError as e:
        raise ValueError(f"line {line_number}: {e}") from e


def read_csv(csv_file: Union[str, Path]) -> List[ExportRow]:
    """Read a file written by :func:`write_csv` back into rows."""
    # Records end with '\n' only; other line-break characters belong to the fields
    with open(csv_file, 'r', encoding='utf-8', newline='\n') as f:
        lines = f.read().split('\n')

    if not lines or lines[0] != HEADER:
        raise ValueError(f"line 1: expected header {HEADER!r}")

    return [
        parse_row(line, number)
        for number, line in enumerate(lines[1:], start=2)
        if line
    ]
