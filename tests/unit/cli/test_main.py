"""Unit tests for CLI command handling."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest

from cli.main import main
from core.types import Book, Product
from store.json_storage import JsonRecordStorage
from store.record_schema import BOOK_SCHEMA, PRODUCT_SCHEMA
from store.xml_storage import XmlRecordStorage


def _write_products(path: Path) -> None:
    JsonRecordStorage(PRODUCT_SCHEMA).save(
        path,
        [
            Product(id=1, name="Laptop", price=Decimal("999.99"), category="Electronics"),
            Product(id=2, name="Chair", price=Decimal("89.99"), category="Furniture"),
        ],
    )


def _write_books(path: Path) -> None:
    XmlRecordStorage(BOOK_SCHEMA).save(
        path,
        [
            Book(id=1, title="Clean Code", author="Robert C. Martin", price=Decimal("33.99")),
            Book(id=2, title="Refactoring", author="Martin Fowler", price=Decimal("47.99")),
        ],
    )


def test_cli_query_where_prints_matching_records(tmp_path: Path, capsys) -> None:
    """Query with --where should print one tab-separated line per match."""
    _write_products(tmp_path / "products.json")
    args = [
        "--data-root",
        str(tmp_path),
        "query",
        "products",
        "--file",
        "products.json",
        "--where",
        "price",
        "<",
        "100",
    ]

    exit_code = main(args)
    output = capsys.readouterr().out.strip()

    assert exit_code == 0 and output == "2\tChair\t89.99\tFurniture"


def test_cli_query_sort_by_orders_records(tmp_path: Path, capsys) -> None:
    """Query with --sort-by should print records in ascending key order."""
    _write_products(tmp_path / "products.json")

    exit_code = main(
        ["--data-root", str(tmp_path), "query", "products", "--file", "products.json",
         "--sort-by", "price"]
    )
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0 and [line.split("\t")[1] for line in lines] == ["Chair", "Laptop"]


def test_cli_query_group_by_prints_counts(tmp_path: Path, capsys) -> None:
    """Query with --group-by should print one line per group."""
    _write_books(tmp_path / "books.xml")

    exit_code = main(
        ["--data-root", str(tmp_path), "query", "books", "--file", "books.xml",
         "--group-by", "author"]
    )
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0 and lines == ["Robert C. Martin\t1", "Martin Fowler\t1"]


def test_cli_query_select_prints_values(tmp_path: Path, capsys) -> None:
    """Query with --select should print one value per record in file order."""
    _write_books(tmp_path / "books.xml")

    exit_code = main(
        ["--data-root", str(tmp_path), "query", "books", "--file", "books.xml",
         "--select", "title"]
    )
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0 and lines == ["Clean Code", "Refactoring"]


def test_cli_query_missing_file_prints_nothing(tmp_path: Path, capsys) -> None:
    """A missing file should produce empty output and a zero exit code."""
    exit_code = main(
        ["--data-root", str(tmp_path), "query", "products", "--file", "absent.json",
         "--select", "name"]
    )

    assert exit_code == 0 and capsys.readouterr().out == ""


def test_cli_query_unknown_field_returns_two(tmp_path: Path, capsys) -> None:
    """Invalid field expressions should print a query error."""
    _write_products(tmp_path / "products.json")

    exit_code = main(
        ["--data-root", str(tmp_path), "query", "products", "--file", "products.json",
         "--sort-by", "weight"]
    )
    output = capsys.readouterr().out.strip()

    assert exit_code == 2 and output.startswith("query_error=")


def test_cli_query_requires_one_operation(tmp_path: Path) -> None:
    """Query without an operation flag should be a usage error."""
    with pytest.raises(SystemExit):
        main(["--data-root", str(tmp_path), "query", "products", "--file", "products.json"])


def test_cli_add_and_remove_books(tmp_path: Path, capsys) -> None:
    """add-book then remove-books should update the XML file."""
    _write_books(tmp_path / "books.xml")
    root_args = ["--data-root", str(tmp_path)]

    add_code = main(
        [*root_args, "add-book", "--file", "books.xml", "--id", "3", "--title", "SICP",
         "--author", "Abelson", "--price", "60.00"]
    )
    remove_code = main(
        [*root_args, "remove-books", "--file", "books.xml", "--where", "title", "==",
         "Clean Code"]
    )
    output = capsys.readouterr().out.splitlines()
    titles = [book.title for book in XmlRecordStorage(BOOK_SCHEMA).load(tmp_path / "books.xml").records]

    assert (add_code, remove_code) == (0, 0)
    assert output == ["added=1", "removed=1"]
    assert titles == ["Refactoring", "SICP"]


def test_cli_add_book_reports_corrupt_file(tmp_path: Path, capsys) -> None:
    """Mutations on undecodable files should exit one with a storage error."""
    (tmp_path / "books.xml").write_text("not xml", encoding="utf-8")

    exit_code = main(
        ["--data-root", str(tmp_path), "add-book", "--file", "books.xml", "--id", "1",
         "--title", "SICP", "--author", "Abelson", "--price", "60"]
    )
    output = capsys.readouterr().out.strip()

    assert exit_code == 1 and output.startswith("storage_error=decode_error")


def test_cli_add_book_rejects_invalid_price(tmp_path: Path) -> None:
    """Non-numeric prices should be rejected by argument parsing."""
    with pytest.raises(SystemExit):
        main(
            ["--data-root", str(tmp_path), "add-book", "--file", "books.xml", "--id", "1",
             "--title", "SICP", "--author", "Abelson", "--price", "free"]
        )


@pytest.mark.parametrize("raw_price", ["NaN", "Infinity", "-Infinity"])
def test_cli_add_book_rejects_non_finite_price(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    raw_price: str,
) -> None:
    """Non-finite prices should be rejected before any file is written."""
    with pytest.raises(SystemExit) as exc_info:
        main(
            ["--data-root", str(tmp_path), "add-book", "--file", "books.xml", "--id", "1",
             "--title", "SICP", "--author", "Abelson", "--price", raw_price]
        )

    assert exc_info.value.code == 2
    assert "not a finite number" in capsys.readouterr().err
    assert (tmp_path / "books.xml").exists() is False


def test_cli_query_rejects_non_finite_filter_value(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A NaN filter value should be a query error, not a crash while comparing."""
    _write_books(tmp_path / "books.xml")

    exit_code = main(
        ["--data-root", str(tmp_path), "query", "books", "--file", "books.xml",
         "--where", "price", ">", "NaN"]
    )

    assert exit_code == 2
    assert "query_error=" in capsys.readouterr().out
