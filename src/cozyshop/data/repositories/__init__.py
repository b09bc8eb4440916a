"""Repository exports."""

from .customer_types_repo import CustomerTypesRepository
from .palette_repo import PaletteRepository
from .products_repo import ProductTemplatesRepository

__all__ = [
    "CustomerTypesRepository",
    "PaletteRepository",
    "ProductTemplatesRepository",
]
