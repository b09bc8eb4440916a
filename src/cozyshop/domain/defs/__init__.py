"""Domain definition exports."""

from .color_def import ColorDef
from .customer_type_def import Budget, CustomerTypeDef
from .product_template_def import ArtAnchorDef, ProductTemplateDef

__all__ = [
    "ArtAnchorDef",
    "Budget",
    "ColorDef",
    "CustomerTypeDef",
    "ProductTemplateDef",
]
