"""Runtime configuration model for recordshelf.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_JSON_INDENT,
    DEFAULT_LOG_LEVEL,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import ShelfConfigError


@dataclass(frozen=True)
class ShelfConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Directory that relative record file names resolve under.
        json_indent: Indentation width for written JSON files.
        log_level: Minimum structured log level.
    """

    data_root: Path
    json_indent: int
    log_level: str

    @classmethod
    def from_env(cls) -> "ShelfConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ShelfConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("SHELF_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        json_indent = _parse_json_indent(os.getenv("SHELF_JSON_INDENT", str(DEFAULT_JSON_INDENT)))
        log_level = _parse_log_level(os.getenv("SHELF_LOG_LEVEL", DEFAULT_LOG_LEVEL))
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            json_indent=json_indent,
            log_level=log_level,
        )

    def resolve_path(self, file_name: str | Path) -> Path:
        """Resolve a record file name against the data root.

        Args:
            file_name: Absolute path or name relative to ``data_root``.

        Returns:
            Absolute record file path.
        """
        file_path = Path(file_name).expanduser()
        if file_path.is_absolute():
            return file_path
        return self.data_root / file_path


def _parse_json_indent(raw_value: str) -> int:
    """Parse the JSON indent environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed non-negative indent width.

    Raises:
        ShelfConfigError: If value is not a non-negative integer.
    """
    try:
        indent = int(raw_value)
    except ValueError as error:
        raise ShelfConfigError(
            "Invalid SHELF_JSON_INDENT value: "
            f"expected integer, got '{raw_value}'. "
            "Set SHELF_JSON_INDENT to a numeric value."
        ) from error
    if indent < 0:
        raise ShelfConfigError(
            f"Invalid SHELF_JSON_INDENT value: expected >= 0, got {indent}."
        )
    return indent


def _parse_log_level(raw_value: str) -> str:
    """Normalize and validate the log level environment value."""
    level = raw_value.strip().lower()
    if level not in SUPPORTED_LOG_LEVELS:
        raise ShelfConfigError(
            f"Invalid SHELF_LOG_LEVEL value '{raw_value}'. "
            f"Supported levels: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return level
