"""Customer archetype repository."""
from __future__ import annotations

from typing import Dict

from cozyshop.data import paths
from cozyshop.data.errors import DataReferenceError, DataValidationError
from cozyshop.data.repositories.base import RepositoryBase
from cozyshop.data.repositories.palette_repo import PaletteRepository
from cozyshop.data.repositories.products_repo import ProductTemplatesRepository
from cozyshop.domain.defs import Budget, CustomerTypeDef


class CustomerTypesRepository(RepositoryBase[CustomerTypeDef]):
    """Loads customer_types.json and checks product and color references."""

    def __init__(
        self,
        base_path=None,
        *,
        products_repo: ProductTemplatesRepository,
        palette_repo: PaletteRepository,
    ) -> None:
        super().__init__(paths.CUSTOMER_TYPES_FILE, base_path)
        self._products_repo = products_repo
        self._palette_repo = palette_repo

    def _build(self, raw: dict[str, object]) -> Dict[str, CustomerTypeDef]:
        customer_types = self._section(raw, "customer_types")
        known_colors = set(self._palette_repo.hex_values())
        definitions: Dict[str, CustomerTypeDef] = {}
        for key, payload in customer_types.items():
            data = self._require_mapping(payload, f"customer type '{key}'")
            type_id = self._require_matching_id(key, data, "customer type")
            product_types = self._require_str_list(
                data.get("product_types"), f"customer type '{key}' product_types"
            )
            if not product_types:
                raise DataValidationError(f"customer type '{key}' must like at least one product.")
            for template_id in product_types:
                if self._products_repo.find(template_id) is None:
                    raise DataReferenceError(
                        f"customer type '{key}' references missing product '{template_id}'."
                    )
            colors = [
                color.upper()
                for color in self._require_str_list(data.get("colors"), f"customer type '{key}' colors")
            ]
            if not colors:
                raise DataValidationError(f"customer type '{key}' must like at least one color.")
            for color in colors:
                if color not in known_colors:
                    raise DataReferenceError(
                        f"customer type '{key}' references color '{color}' missing from the palette."
                    )
            budget = self._parse_budget(key, data.get("budget"))
            patience = self._require_number(data.get("patience_seconds"), f"customer type '{key}' patience_seconds")
            if patience <= 0:
                raise DataValidationError(f"customer type '{key}' patience_seconds must be positive.")
            weight = self._require_int(data.get("weight", 1), f"customer type '{key}' weight")
            if weight <= 0:
                raise DataValidationError(f"customer type '{key}' weight must be positive.")
            definitions[type_id] = CustomerTypeDef(
                id=type_id,
                avatar=self._require_str(data.get("avatar"), f"customer type '{key}' avatar"),
                product_types=tuple(dict.fromkeys(product_types)),
                colors=tuple(dict.fromkeys(colors)),
                budget=budget,
                patience_seconds=patience,
                weight=weight,
            )
        if not definitions:
            raise DataValidationError("customer_types.json must define at least one customer type.")
        return definitions

    def _parse_budget(self, key: str, raw_budget: object) -> Budget:
        budget = self._require_mapping(raw_budget, f"customer type '{key}' budget")
        low = self._require_int(budget.get("min"), f"customer type '{key}' budget.min")
        high = self._require_int(budget.get("max"), f"customer type '{key}' budget.max")
        if low < 0 or low >= high:
            raise DataValidationError(f"customer type '{key}' budget must satisfy 0 <= min < max.")
        return Budget(min=low, max=high)
