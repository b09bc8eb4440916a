"""Helpers for resolving shop definition locations."""
from __future__ import annotations

from pathlib import Path

PRODUCTS_FILE = "products.json"
PALETTE_FILE = "palette.json"
CUSTOMER_TYPES_FILE = "customer_types.json"
DEFINITION_FILES = (PRODUCTS_FILE, PALETTE_FILE, CUSTOMER_TYPES_FILE)


def get_repo_root() -> Path:
    """Return the repository root (the directory holding data/ and src/)."""
    return Path(__file__).resolve().parents[3]


def get_definitions_path(base_path: Path | str | None = None) -> Path:
    """Return the directory containing the product, customer and palette JSON files."""
    if base_path is not None:
        return Path(base_path)
    return get_repo_root() / "data" / "definitions"


def get_definition_file(filename: str, base_path: Path | str | None = None) -> Path:
    if filename not in DEFINITION_FILES:
        raise ValueError(f"'{filename}' is not a shop definition file.")
    return get_definitions_path(base_path) / filename
