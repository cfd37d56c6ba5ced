"""Integration tests for the sample product and book scenarios."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from decimal import Decimal
from pathlib import Path

from cli.main import main
from core.config import ShelfConfig
from core.types import Book
from store.shelf_sdk import ShelfClient


def test_products_demo_prints_query_results(tmp_path: Path, capsys) -> None:
    """The products demo should print groups, sorted names and source-order prices."""
    exit_code = main(["--data-root", str(tmp_path), "demo", "products"])
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert lines == [
        "Electronics: 2 products",
        "Furniture: 2 products",
        "Chair",
        "Desk",
        "Smartphone",
        "Laptop",
        "999.99",
        "499.99",
        "199.99",
        "89.99",
    ]
    assert (tmp_path / "products.json").exists()


def test_books_demo_adds_and_removes(tmp_path: Path, capsys) -> None:
    """The books demo should drop Clean Code and keep the added book."""
    exit_code = main(["--data-root", str(tmp_path), "demo", "books", "--file", "library.xml"])
    lines = capsys.readouterr().out.splitlines()
    removed_index = lines.index("removed=1")

    assert exit_code == 0
    assert lines[removed_index + 1:] == [
        "The Pragmatic Programmer",
        "Refactoring",
        "Clean Architecture",
        "Domain-Driven Design",
    ]


def test_sdk_flow_over_both_formats(tmp_path: Path) -> None:
    """The SDK client should query products and mutate books under one root."""
    config = replace(ShelfConfig.from_env(), data_root=tmp_path)
    client = ShelfClient(config)
    books_path = client.resolve_path("books.xml")
    first = Book(id=1, title="Clean Code", author="Robert C. Martin", price=Decimal("33.99"))
    second = Book(id=2, title="Clean Code", author="Robert C. Martin", price=Decimal("35.50"))
    third = Book(id=3, title="SICP", author="Abelson", price=Decimal("60.00"))

    async def _flow() -> list[str]:
        books = client.books()
        await books.add(books_path, first)
        await books.add(books_path, second)
        await books.add(books_path, third)
        await books.remove(books_path, lambda book: book.title == "Clean Code")
        return await books.project(books_path, lambda book: book.title)

    titles = asyncio.run(_flow())
    product_names = asyncio.run(
        client.products().project(client.resolve_path("products.json"), lambda p: p.name)
    )

    assert titles == ["SICP"] and product_names == []
