"""Tests for the in-memory catalog."""
import tempfile
from pathlib import Path

import pytest

from inventory_tracker.catalog import Catalog, Statistics
from inventory_tracker.items import Item, items_constructed


@pytest.fixture
def catalog():
    """A catalog with three general items."""
    catalog = Catalog()
    catalog.add(Item(1, "Apple", 2.0, 10))
    catalog.add(Item(2, "banana", 1.0, 30))
    catalog.add(Item(3, "Cherry", 2.0, 5))
    return catalog


def ids(items):
    return [item.id for item in items]


class TestAddRemove:
    """Tests for add, remove and find_by_id."""

    def test_add_appends_and_logs(self):
        catalog = Catalog()
        catalog.add(Item(1, "Pen", 1.0, 1))
        catalog.add(Item(2, "Ink", 1.0, 1))

        assert ids(catalog.items) == [1, 2]
        assert catalog.transaction_log == ("Added: Pen", "Added: Ink")

    def test_remove_preserves_order(self, catalog):
        """Test that removing the middle item keeps the others in order."""
        assert catalog.remove(2) is True

        assert ids(catalog.items) == [1, 3]
        assert catalog.transaction_log[-1] == "Removed: banana"

    def test_remove_missing_returns_false(self, catalog):
        log_before = catalog.transaction_log

        assert catalog.remove(42) is False
        assert len(catalog) == 3
        assert catalog.transaction_log == log_before

    def test_remove_takes_first_duplicate(self):
        """Test that duplicate ids are accepted and removed one at a time."""
        catalog = Catalog()
        catalog.add(Item(7, "First", 1.0, 1))
        catalog.add(Item(7, "Second", 1.0, 1))

        catalog.remove(7)

        assert [item.name for item in catalog] == ["Second"]

    def test_find_by_id(self, catalog):
        assert catalog.find_by_id(3).name == "Cherry"
        assert catalog.find_by_id(99) is None

    def test_find_returns_live_item(self, catalog):
        catalog.find_by_id(1).quantity = 0

        assert catalog.statistics().total_quantity == 35

    def test_counter_independent_of_live_count(self):
        catalog = Catalog()
        before = items_constructed()
        for item_id in (1, 2, 3):
            catalog.add(Item(item_id, f"Item {item_id}", 1.0, 1))

        for item_id in (1, 2, 3):
            catalog.remove(item_id)

        assert items_constructed() - before == 3
        assert len(catalog) == 0


class TestSorting:
    """Tests for the stable sort operations."""

    def test_sort_by_name_ignores_case(self, catalog):
        catalog.add(Item(4, "apricot", 1.0, 1))

        catalog.sort_by_name()

        assert [item.name for item in catalog] == ["Apple", "apricot", "banana", "Cherry"]
        assert catalog.transaction_log[-1] == "Sorted by name"

    def test_sort_by_price(self, catalog):
        catalog.sort_by_price()

        assert ids(catalog.items) == [2, 1, 3]
        assert catalog.transaction_log[-1] == "Sorted by price"

    def test_sort_by_quantity(self, catalog):
        catalog.sort_by_quantity()

        assert ids(catalog.items) == [3, 1, 2]
        assert catalog.transaction_log[-1] == "Sorted by quantity"

    def test_resort_keeps_current_order_of_price_ties(self):
        """Test that a price re-sort keeps equal prices in their current (name) order."""
        catalog = Catalog()
        catalog.add(Item(1, "Zebra toy", 5.0, 1))
        catalog.add(Item(2, "Ant farm", 5.0, 1))
        catalog.add(Item(3, "Mug", 1.0, 1))
        catalog.add(Item(4, "Kite", 5.0, 1))

        catalog.sort_by_price()
        price_order = ids(catalog.items)
        assert price_order == [3, 1, 2, 4]

        catalog.sort_by_name()
        assert ids(catalog.items) == [2, 4, 3, 1]

        catalog.sort_by_price()
        assert ids(catalog.items) == [3, 2, 4, 1]

    def test_equal_names_keep_order(self):
        catalog = Catalog()
        catalog.add(Item(1, "widget", 3.0, 1))
        catalog.add(Item(2, "Widget", 1.0, 1))
        catalog.add(Item(3, "WIDGET", 2.0, 1))

        catalog.sort_by_name()

        assert ids(catalog.items) == [1, 2, 3]


class TestSearch:
    """Tests for token-substring name search."""

    @pytest.fixture
    def cakes(self):
        catalog = Catalog()
        catalog.add(Item(1, "Red Velvet Cake", 300.0, 2))
        catalog.add(Item(2, "Blue Velvet Sofa", 20000.0, 1))
        catalog.add(Item(3, "Carrot Cake", 250.0, 4))
        return catalog

    def test_matches_substring_of_token(self, cakes):
        assert ids(cakes.search_by_name("vel")) == [1, 2]

    def test_does_not_span_tokens(self, cakes):
        """Test that a keyword spanning a token boundary does not match."""
        assert cakes.search_by_name("edvet") == []
        assert cakes.search_by_name("red velvet") == []

    def test_is_case_insensitive(self, cakes):
        assert ids(cakes.search_by_name("CAKE")) == [1, 3]

    def test_results_follow_catalog_order(self, cakes):
        cakes.sort_by_price()

        assert ids(cakes.search_by_name("cake")) == [3, 1]

    def test_search_has_no_side_effect(self, cakes):
        log_before = cakes.transaction_log

        cakes.search_by_name("sofa")

        assert cakes.transaction_log == log_before

    def test_empty_keyword_matches_named_items(self, cakes):
        cakes.add(Item(4, "   ", 1.0, 1))

        assert ids(cakes.search_by_name("")) == [1, 2, 3]


class TestStatistics:
    """Tests for aggregate statistics."""

    def test_sums_current_items(self, catalog):
        stats = catalog.statistics()

        assert stats == Statistics(count=3, total_value=60.0, total_quantity=45)

    def test_tracks_removals(self, catalog):
        catalog.remove(1)

        stats = catalog.statistics()
        assert stats.count == 2
        assert stats.total_value == pytest.approx(40.0)
        assert stats.total_quantity == 35

    def test_zero_after_clear(self, catalog):
        catalog.clear()

        stats = catalog.statistics()
        assert stats.count == 0
        assert stats.total_value == 0
        assert isinstance(stats.total_value, float)
        assert stats.total_quantity == 0
        assert catalog.transaction_log[-1] == "Cleared all products"

    def test_format_uses_two_decimals(self):
        catalog = Catalog()
        catalog.add(Item(1, "Tea", 3.333, 3))

        text = catalog.statistics().format()

        assert "Total Products: 1" in text
        assert "Total Value: ₹10.00" in text
        assert "Total Quantity: 3" in text


class TestExport:
    """Tests for Catalog.export."""

    def test_export_logs_on_success(self, catalog):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "inventory.csv"
            catalog.export(path)

            assert len(path.read_text(encoding='utf-8').splitlines()) == 4
        assert catalog.transaction_log[-1] == f"Exported to CSV: {path}"

    def test_failed_export_leaves_catalog_untouched(self, catalog):
        log_before = catalog.transaction_log
        items_before = catalog.items

        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(OSError):
                catalog.export(Path(tmpdir) / "missing" / "inventory.csv")

        assert catalog.transaction_log == log_before
        assert catalog.items == items_before


class TestGrid:
    """Tests for Catalog.grid."""

    def test_row_major_with_empty_tail(self, catalog):
        catalog.add(Item(4, "Date", 1.0, 1))
        catalog.add(Item(5, "Elder", 1.0, 1))

        grid = catalog.grid(2)

        assert [[item.id if item else None for item in row] for row in grid] == \
            [[1, 2], [3, 4], [5, None]]

    def test_exact_fit(self, catalog):
        assert len(catalog.grid(3)) == 1
        assert len(catalog.grid(1)) == 3

    def test_empty_catalog(self):
        assert Catalog().grid(4) == []

    def test_rejects_zero_columns(self, catalog):
        with pytest.raises(ValueError):
            catalog.grid(0)


class TestCategories:
    def test_known_categories(self):
        assert Catalog().categories == ("General", "Electronics", "Grocery")

    def test_not_enforced(self):
        catalog = Catalog()
        catalog.add(Item(1, "Odd", 1.0, 1, category="Misc"))

        assert catalog.find_by_id(1).category == "Misc"
        assert "Misc" not in catalog.categories
