#!/usr/bin/env python3
"""
Command-line interface for Inventory Tracker
"""
import sys
import os
import argparse
import itertools
import logging
from pathlib import Path
from typing import Iterator, Optional

from .catalog import Catalog
from .exporter import read_csv
from .items import Item, items_constructed, render_row
from .validation import validate_items

RULE = "─" * 73

MENU = """
╔════════════════════════════════════════╗
║            MAIN MENU                   ║
╚════════════════════════════════════════╝
1. Add Product
2. Remove Product
3. Show All Products
4. Sort Products
5. Update Quantity
6. Search Product
7. Export to CSV
8. Show Statistics
9. Show Transaction Log
0. Exit
────────────────────────────────────────"""


def setup_logging(level: Optional[str] = None) -> None:
    """Configure diagnostic logging to stderr."""
    level = (level or os.environ.get("INVENTORY_TRACKER_LOG_LEVEL", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )


def read_int(prompt: str) -> int:
    """Prompt until the answer parses as an integer."""
    while True:
        try:
            return int(input(prompt))
        except ValueError:
            print("Please enter a valid number.")


def read_float(prompt: str) -> float:
    """Prompt until the answer parses as a number."""
    while True:
        try:
            return float(input(prompt))
        except ValueError:
            print("Please enter a valid number.")


def add_product(catalog: Catalog, ids: Iterator[int]) -> None:
    print("\n=== Add Product ===")
    print("1. General Product")
    print("2. Electronics")
    print("3. Grocery")

    kind = read_int("Select type: ")
    name = input("Enter product name: ")
    price = read_float("Enter price: ")
    quantity = read_int("Enter quantity: ")

    if kind == 1:
        weight = read_float("Enter weight: ")
        unit = input("Enter unit (kg/g/L/ml/pcs): ")
        item = Item(next(ids), name, price, quantity, weight, unit)
    elif kind == 2:
        warranty = read_int("Enter warranty (months): ")
        brand = input("Enter brand: ")
        item = Item.electronics(next(ids), name, price, quantity, warranty, brand)
    elif kind == 3:
        weight = read_float("Enter weight: ")
        unit = input("Enter unit: ")
        perishable = input("Is perishable? (true/false): ").strip().lower() == "true"
        item = Item.grocery(next(ids), name, price, quantity, weight, unit, perishable)
    else:
        print("❌ Invalid type!")
        return

    catalog.add(item)
    print(f"✅ Product added successfully! ID: {item.id}")


def remove_product(catalog: Catalog) -> None:
    print("\n=== Remove Product ===")
    item_id = read_int("Enter product ID to remove: ")

    if catalog.remove(item_id):
        print("✅ Product removed successfully!")
    else:
        print("❌ Product not found!")


def show_all_products(catalog: Catalog) -> None:
    print("\n=== All Products ===")
    if not len(catalog):
        print("No products available.")
        return

    print(RULE)
    print(f"{'ID':<5s} | {'Name':<20s} | {'Qty':<5s} | {'Price':<12s} | {'Weight':<15s}")
    print(RULE)
    for item in catalog:
        print(render_row(item))
    print(RULE)
    print(f"Total Products: {len(catalog)}")


def sort_products(catalog: Catalog) -> None:
    print("\n=== Sort Products ===")
    print("1. Sort by Name")
    print("2. Sort by Price")
    print("3. Sort by Quantity")

    choice = read_int("Select sorting option: ")
    if choice == 1:
        catalog.sort_by_name()
        print("✅ Sorted by name!")
    elif choice == 2:
        catalog.sort_by_price()
        print("✅ Sorted by price!")
    elif choice == 3:
        catalog.sort_by_quantity()
        print("✅ Sorted by quantity!")
    else:
        print("❌ Invalid option!")


def update_quantity(catalog: Catalog) -> None:
    print("\n=== Update Quantity ===")
    item = catalog.find_by_id(read_int("Enter product ID: "))

    if item is None:
        print("❌ Product not found!")
        return

    print(f"Current quantity: {item.quantity}")
    item.quantity = read_int("Enter new quantity: ")
    print("✅ Quantity updated successfully!")


def search_product(catalog: Catalog) -> None:
    print("\n=== Search Product ===")
    results = catalog.search_by_name(input("Enter search keyword: "))

    if not results:
        print("No products found!")
        return

    print(f"Found {len(results)} product(s):")
    for item in results:
        print(render_row(item))


def export_to_csv(catalog: Catalog) -> None:
    print("\n=== Export to CSV ===")
    filename = input("Enter filename (e.g., inventory.csv): ")

    try:
        catalog.export(filename)
    except OSError as e:
        print(f"❌ Error exporting: {e}")
        return
    print(f"✅ Exported successfully to {filename}")


def show_statistics(catalog: Catalog) -> None:
    print("\n" + catalog.statistics().format())
    print(f"Total Product Types: {items_constructed()}")


def show_transaction_log(catalog: Catalog) -> None:
    print("\n=== Transaction Log ===")
    for number, entry in enumerate(catalog.transaction_log, start=1):
        print(f"{number}. {entry}")


def shell_command(catalog: Optional[Catalog] = None) -> int:
    """Run the interactive menu until the operator exits."""
    catalog = catalog if catalog is not None else Catalog()
    ids = itertools.count(1)

    actions = {
        1: lambda: add_product(catalog, ids),
        2: lambda: remove_product(catalog),
        3: lambda: show_all_products(catalog),
        4: lambda: sort_products(catalog),
        5: lambda: update_quantity(catalog),
        6: lambda: search_product(catalog),
        7: lambda: export_to_csv(catalog),
        8: lambda: show_statistics(catalog),
        9: lambda: show_transaction_log(catalog),
    }

    print("╔═══════════════════════════════════════════════════════╗")
    print("║   PRODUCT INVENTORY MANAGEMENT SYSTEM                 ║")
    print("╚═══════════════════════════════════════════════════════╝")

    try:
        while True:
            print(MENU)
            choice = read_int("Enter your choice: ")
            if choice == 0:
                print("Exiting... Thank you!")
                return 0

            action = actions.get(choice)
            if action is None:
                print("Invalid choice! Please try again.")
            else:
                action()
    except (EOFError, KeyboardInterrupt):
        print("\n\n👋 Goodbye")
        return 0


def validate_command(csv_file: Path) -> int:
    """Check an exported CSV file for suspicious values."""
    csv_file = Path(csv_file).resolve()

    if not csv_file.exists():
        print(f"❌ Error: {csv_file} not found!")
        return 1

    try:
        rows = read_csv(csv_file)
    except (OSError, ValueError) as e:
        print(f"❌ Error reading {csv_file}: {e}")
        return 1

    print(f"✅ Read {len(rows)} product(s) from {csv_file}")

    print(f"\n🔍 Validating products...")
    issues = validate_items(rows)

    if not issues:
        print(f"✅ No validation issues found!")
        return 0

    print(f"\n⚠️  Found {len(issues)} issue(s):")
    for issue in issues[:20]:  # Limit to first 20
        print(f"   {issue}")
    if len(issues) > 20:
        print(f"   ... and {len(issues) - 20} more")
    return 1


def api_command(directory: Path = None, host: str = "127.0.0.1", port: int = 8765) -> int:
    """Start the inventory API server, exporting into ``directory``."""
    if directory is None:
        directory = Path.cwd()
    else:
        directory = Path(directory).resolve()

    if not directory.is_dir():
        print(f"❌ Directory {directory} does not exist")
        return 1

    # Change to directory so exports land there
    os.chdir(directory)

    print(f"🚀 Starting Inventory Tracker API Server...")
    print(f"📂 Exports go to: {directory}")
    print(f"🌐 Server will run at: http://{host}:{port}")
    print(f"📦 Items: http://{host}:{port}/api/items")
    print(f"❤️  Health check: http://{host}:{port}/health")
    print(f"Press Ctrl+C to stop\n")

    try:
        import uvicorn
        from .api_server import app
    except ImportError as e:
        print(f"❌ Missing required package: {e}")
        print("\nInstall API server dependencies:")
        print("  pip install fastapi uvicorn")
        return 1

    try:
        uvicorn.run(app, host=host, port=port, log_level="info")
    except KeyboardInterrupt:
        print("\n\n👋 API server stopped")
    return 0


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser_cli = argparse.ArgumentParser(
        description="Inventory Tracker - Manage an in-memory product inventory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start the interactive menu
  inventory-tracker shell

  # Check an exported CSV file for duplicate IDs and negative values
  inventory-tracker validate inventory.csv

  # Start the API server
  inventory-tracker api ~/exports --port 8765
        """
    )
    parser_cli.add_argument('--log-level', type=str, help='Diagnostic log level (default: $INVENTORY_TRACKER_LOG_LEVEL or WARNING)')

    subparsers = parser_cli.add_subparsers(dest='command', help='Command to run')

    subparsers.add_parser('shell', help='Start the interactive menu')

    validate_parser = subparsers.add_parser('validate', help='Validate an exported CSV file')
    validate_parser.add_argument('file', type=Path, help='CSV file written by the export command')

    api_parser = subparsers.add_parser('api', help='Start API server')
    api_parser.add_argument('directory', type=Path, nargs='?', help='Directory to export into (default: current directory)')
    api_parser.add_argument('--host', type=str, default='127.0.0.1', help='Host to bind (default: 127.0.0.1)')
    api_parser.add_argument('--port', '-p', type=int, default=8765, help='Port number (default: 8765)')

    args = parser_cli.parse_args(argv)
    setup_logging(args.log_level)

    if args.command == 'shell':
        return shell_command()
    elif args.command == 'validate':
        return validate_command(args.file)
    elif args.command == 'api':
        return api_command(args.directory, args.host, args.port)
    else:
        parser_cli.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
