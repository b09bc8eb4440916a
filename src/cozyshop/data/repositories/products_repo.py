"""Product template repository."""
from __future__ import annotations

from typing import Dict

from cozyshop.data import paths
from cozyshop.data.errors import DataValidationError
from cozyshop.data.repositories.base import RepositoryBase
from cozyshop.domain.defs import ArtAnchorDef, ProductTemplateDef


class ProductTemplatesRepository(RepositoryBase[ProductTemplateDef]):
    """Loads and validates the blank products from products.json."""

    def __init__(self, base_path=None) -> None:
        super().__init__(paths.PRODUCTS_FILE, base_path)

    def get_template(self, template_id: str) -> ProductTemplateDef | None:
        return self.find(template_id)

    def _build(self, raw: dict[str, object]) -> Dict[str, ProductTemplateDef]:
        products = self._section(raw, "products")
        definitions: Dict[str, ProductTemplateDef] = {}
        for key, payload in products.items():
            data = self._require_mapping(payload, f"product '{key}'")
            template_id = self._require_matching_id(key, data, "product")
            base_price = self._require_int(data.get("base_price"), f"product '{key}' base_price")
            if base_price <= 0:
                raise DataValidationError(f"product '{key}' base_price must be positive.")
            definitions[template_id] = ProductTemplateDef(
                id=template_id,
                name=self._require_str(data.get("name"), f"product '{key}' name"),
                base_price=base_price,
                art_anchor=self._parse_anchor(key, data.get("art_anchor")),
                image=str(data.get("image", "")),
            )
        if not definitions:
            raise DataValidationError("products.json must define at least one product.")
        return definitions

    def _parse_anchor(self, key: str, raw_anchor: object) -> ArtAnchorDef:
        anchor = self._require_mapping(raw_anchor, f"product '{key}' art_anchor")
        width = self._require_int(anchor.get("width"), f"product '{key}' art_anchor.width")
        height = self._require_int(anchor.get("height"), f"product '{key}' art_anchor.height")
        if width <= 0 or height <= 0:
            raise DataValidationError(f"product '{key}' art_anchor must have a positive size.")
        return ArtAnchorDef(
            x=self._require_int(anchor.get("x"), f"product '{key}' art_anchor.x"),
            y=self._require_int(anchor.get("y"), f"product '{key}' art_anchor.y"),
            width=width,
            height=height,
            rotation=self._require_number(anchor.get("rotation", 0), f"product '{key}' art_anchor.rotation"),
        )
