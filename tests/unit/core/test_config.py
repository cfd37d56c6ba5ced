"""Unit tests for core config parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import ShelfConfig
from core.errors import ShelfConfigError


def test_from_env_reads_data_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve data root from environment."""
    monkeypatch.setenv("SHELF_DATA_ROOT", "./.tmp-shelf")

    config = ShelfConfig.from_env()

    assert config.data_root.name == ".tmp-shelf" and config.data_root.is_absolute()


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to default indent and log level."""
    monkeypatch.delenv("SHELF_JSON_INDENT", raising=False)
    monkeypatch.delenv("SHELF_LOG_LEVEL", raising=False)

    config = ShelfConfig.from_env()

    assert (config.json_indent, config.log_level) == (2, "info")


def test_from_env_raises_for_invalid_indent(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-numeric JSON indent."""
    monkeypatch.setenv("SHELF_JSON_INDENT", "wide")

    with pytest.raises(ShelfConfigError):
        ShelfConfig.from_env()


def test_from_env_raises_for_negative_indent(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject negative JSON indent widths."""
    monkeypatch.setenv("SHELF_JSON_INDENT", "-1")

    with pytest.raises(ShelfConfigError):
        ShelfConfig.from_env()


def test_from_env_normalizes_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should accept log levels case-insensitively."""
    monkeypatch.setenv("SHELF_LOG_LEVEL", " WARNING ")

    config = ShelfConfig.from_env()

    assert config.log_level == "warning"


def test_from_env_raises_for_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject unsupported log levels."""
    monkeypatch.setenv("SHELF_LOG_LEVEL", "chatty")

    with pytest.raises(ShelfConfigError):
        ShelfConfig.from_env()


def test_resolve_path_keeps_absolute_paths(tmp_path: Path) -> None:
    """Absolute file paths should bypass the data root."""
    config = ShelfConfig(data_root=tmp_path / "root", json_indent=2, log_level="info")
    absolute = tmp_path / "elsewhere" / "products.json"

    assert config.resolve_path(absolute) == absolute


def test_resolve_path_joins_relative_names(tmp_path: Path) -> None:
    """Relative file names should resolve under the data root."""
    config = ShelfConfig(data_root=tmp_path, json_indent=2, log_level="info")

    assert config.resolve_path("books.xml") == tmp_path / "books.xml"
