#!/usr/bin/env python3
"""
Optional data checks for catalog contents.

The catalog itself accepts any values (negative prices, duplicate ids, ...).
These checks are a separate policy applied by the drivers when asked to.
"""
from collections import defaultdict
from typing import Iterable, List


def validate_items(items: Iterable) -> List[str]:
    """
    Validate items and return a list of issues.

    Accepts anything with ``id``, ``name``, ``price``, ``quantity`` and
    ``weight`` attributes, so both catalog items and rows read back from an
    export can be checked.
    """
    issues = []
    names_by_id = defaultdict(list)

    for item in items:
        names_by_id[item.id].append(item.name)

        if not item.name.strip():
            issues.append(f"❌ {item.id}: name is blank")
        if item.price < 0:
            issues.append(f"⚠️  {item.id} ({item.name}): negative price {item.price}")
        if item.quantity < 0:
            issues.append(f"⚠️  {item.id} ({item.name}): negative quantity {item.quantity}")
        if item.weight < 0:
            issues.append(f"⚠️  {item.id} ({item.name}): negative weight {item.weight}")

    for item_id, names in names_by_id.items():
        if len(names) > 1:
            issues.append(f"❌ Duplicate ID {item_id}: {', '.join(names)}")

    return issues
