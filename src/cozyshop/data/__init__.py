"""Data layer utilities for loading shop definitions."""

from .errors import DataError, DataLoadError, DataReferenceError, DataValidationError
from .paths import DEFINITION_FILES, get_definition_file, get_definitions_path, get_repo_root

__all__ = [
    "DataError",
    "DataLoadError",
    "DataReferenceError",
    "DataValidationError",
    "DEFINITION_FILES",
    "get_definition_file",
    "get_definitions_path",
    "get_repo_root",
]
