"""Reads one shop definition file into its top-level JSON object."""
from __future__ import annotations

import json
from pathlib import Path

from .errors import DataLoadError, DataValidationError


def load_definition_file(path: Path) -> dict[str, object]:
    """Return the file's top-level object.

    Missing, unreadable and malformed files raise DataLoadError tagged with the
    file name. A file holding anything but an object raises DataValidationError.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"{path.name} is missing from {path.parent}", filename=path.name) from exc
    except OSError as exc:
        raise DataLoadError(f"Unable to read {path.name} in {path.parent}", filename=path.name) from exc

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(
            f"{path.name} is not valid JSON (line {exc.lineno}, column {exc.colno}): {exc.msg}",
            filename=path.name,
        ) from exc
    if not isinstance(raw, dict):
        raise DataValidationError(f"{path.name} must hold a JSON object at the top level.")
    return raw
