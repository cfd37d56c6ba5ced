"""Sample product and book scenarios for the CLI."""

from __future__ import annotations

import argparse
from decimal import Decimal
from typing import Any

from core.constants import DEFAULT_BOOKS_FILE_NAME, DEFAULT_PRODUCTS_FILE_NAME
from core.types import Book, Product, StorageFault
from store.shelf_sdk import ShelfClient

SAMPLE_PRODUCTS = (
    Product(id=1, name="Laptop", price=Decimal("999.99"), category="Electronics"),
    Product(id=2, name="Smartphone", price=Decimal("499.99"), category="Electronics"),
    Product(id=3, name="Desk", price=Decimal("199.99"), category="Furniture"),
    Product(id=4, name="Chair", price=Decimal("89.99"), category="Furniture"),
)

SAMPLE_BOOKS = (
    Book(id=1, title="Clean Code", author="Robert C. Martin", price=Decimal("33.99")),
    Book(id=2, title="The Pragmatic Programmer", author="Andrew Hunt", price=Decimal("42.50")),
    Book(id=3, title="Refactoring", author="Martin Fowler", price=Decimal("47.99")),
    Book(id=4, title="Clean Architecture", author="Robert C. Martin", price=Decimal("29.99")),
)

NEW_BOOK = Book(id=5, title="Domain-Driven Design", author="Eric Evans", price=Decimal("59.99"))
REMOVED_TITLE = "Clean Code"
PRICE_CEILING = Decimal("10000")
BOOK_PRICE_FLOOR = Decimal("40")


def add_demo_command(subparsers: Any) -> None:
    """Register demo subcommand."""
    parser = subparsers.add_parser("demo", help="Run a sample products or books scenario")
    parser.add_argument("kind", choices=("products", "books"), help="Scenario to run")
    parser.add_argument("--file", help="Record file name; defaults per scenario")


async def run_demo_command(client: ShelfClient, args: argparse.Namespace) -> int:
    """Execute the selected sample scenario."""
    if args.kind == "products":
        return await _run_products_demo(client, args.file or DEFAULT_PRODUCTS_FILE_NAME)
    return await _run_books_demo(client, args.file or DEFAULT_BOOKS_FILE_NAME)


async def _run_products_demo(client: ShelfClient, file_name: str) -> int:
    """Write sample products and print each query result.

    Args:
        client: SDK client.
        file_name: Products JSON file name.

    Returns:
        Exit code.
    """
    path = client.resolve_path(file_name)
    saved = await client.product_storage().save_async(path, SAMPLE_PRODUCTS)
    if saved.fault is not None:
        return _report_fault(saved.fault)
    products = client.products()

    expensive = await products.filter(path, lambda product: product.price > PRICE_CEILING)
    for product in expensive:
        print(product.name)
    by_category = await products.group_by(path, lambda product: product.category)
    for category, members in by_category.items():
        print(f"{category}: {len(members)} products")
    by_price = await products.sort_by(path, lambda product: product.price)
    for product in by_price:
        print(product.name)
    prices = await products.project(path, lambda product: product.price)
    for price in prices:
        print(price)
    return 0


async def _run_books_demo(client: ShelfClient, file_name: str) -> int:
    """Write sample books, query them, then add and remove entries.

    Args:
        client: SDK client.
        file_name: Books XML file name.

    Returns:
        Exit code.
    """
    path = client.resolve_path(file_name)
    saved = await client.book_storage().save_async(path, SAMPLE_BOOKS)
    if saved.fault is not None:
        return _report_fault(saved.fault)
    books = client.books()

    for book in await books.filter(path, lambda book: book.price > BOOK_PRICE_FLOOR):
        print(book.title)
    by_author = await books.group_by(path, lambda book: book.author)
    for author, members in by_author.items():
        print(f"{author}: {len(members)} books")
    for book in await books.sort_by(path, lambda book: book.price):
        print(book.title)
    for title in await books.project(path, lambda book: book.title):
        print(title)

    added = await books.add(path, NEW_BOOK)
    if added.fault is not None:
        return _report_fault(added.fault)
    removed = await books.remove(path, lambda book: book.title == REMOVED_TITLE)
    if removed.fault is not None:
        return _report_fault(removed.fault)
    print(f"removed={removed.affected_count}")
    for title in await books.project(path, lambda book: book.title):
        print(title)
    return 0


def _report_fault(fault: StorageFault) -> int:
    print(f"storage_error={fault.kind}: {fault.message}")
    return 1
