"""Customer profile generation from trends and customer archetypes."""
from __future__ import annotations

import logging
from typing import Container, List, Sequence

from cozyshop.core.rng import RNG
from cozyshop.core.types import GenerationMode
from cozyshop.data.repositories import CustomerTypesRepository, PaletteRepository, ProductTemplatesRepository
from cozyshop.domain.customer import Customer, CustomerPreferences
from cozyshop.domain.defs import Budget, CustomerTypeDef
from cozyshop.domain.state import Trend
from cozyshop.services.factories import make_instance_id

logger = logging.getLogger(__name__)

AD_HOC_AVATAR = "images/customers/default.png"
AD_HOC_TYPE = "wanderer"

# Draw 1 liked type with 30% chance, otherwise 2; colors are a coin flip.
SINGLE_TYPE_CHANCE = 0.3
SINGLE_COLOR_CHANCE = 0.5

AD_HOC_BUDGET_MIN_BASE = 5
AD_HOC_BUDGET_MIN_SPREAD = 5
AD_HOC_BUDGET_MAX_BASE = 15
AD_HOC_BUDGET_MAX_SPREAD = 15
AD_HOC_PATIENCE_BASE = 10
AD_HOC_PATIENCE_SPREAD = 10


class CustomerGenerator:
    """Produces customer preferences.

    ``ad_hoc`` customers are shaped by the current trend and get a random
    budget and patience. ``typed`` customers come from the archetype table and
    carry that archetype's budget and fixed patience.
    """

    def __init__(
        self,
        *,
        products_repo: ProductTemplatesRepository,
        palette_repo: PaletteRepository,
        customer_types_repo: CustomerTypesRepository,
    ) -> None:
        self._products_repo = products_repo
        self._palette_repo = palette_repo
        self._customer_types_repo = customer_types_repo

    def generate(self, rng: RNG, trend: Trend) -> CustomerPreferences:
        """Return ad-hoc preferences biased by the trend."""
        type_pool = _union(trend.popular_product_types, [rng.choice(self._products_repo.ids())])
        palette = self._palette_repo.hex_values()
        color_pool = _union(trend.popular_colors, [rng.choice(palette), rng.choice(palette)])
        liked_types = _draw(rng, type_pool, SINGLE_TYPE_CHANCE)
        liked_colors = _draw(rng, color_pool, SINGLE_COLOR_CHANCE)
        budget = Budget(
            min=AD_HOC_BUDGET_MIN_BASE + rng.randint(0, AD_HOC_BUDGET_MIN_SPREAD - 1),
            max=AD_HOC_BUDGET_MAX_BASE + rng.randint(0, AD_HOC_BUDGET_MAX_SPREAD - 1),
        )
        patience = AD_HOC_PATIENCE_BASE + rng.randint(0, AD_HOC_PATIENCE_SPREAD - 1)
        return CustomerPreferences(
            liked_product_types=frozenset(liked_types),
            liked_colors=frozenset(liked_colors),
            budget=budget,
            patience_seconds=float(patience),
        )

    def generate_typed(self, rng: RNG, customer_type: CustomerTypeDef) -> CustomerPreferences:
        """Return preferences drawn from an archetype's liked products and colors."""
        return CustomerPreferences(
            liked_product_types=frozenset(_draw(rng, customer_type.product_types, SINGLE_TYPE_CHANCE)),
            liked_colors=frozenset(_draw(rng, customer_type.colors, SINGLE_COLOR_CHANCE)),
            budget=customer_type.budget,
            patience_seconds=customer_type.patience_seconds,
        )

    def pick_customer_type(self, rng: RNG) -> CustomerTypeDef:
        """Weighted pick from the archetype table."""
        customer_types = self._customer_types_repo.all()
        total = sum(entry.weight for entry in customer_types)
        roll = rng.random() * total
        for entry in customer_types:
            roll -= entry.weight
            if roll < 0:
                return entry
        return customer_types[-1]

    def create_customer(
        self,
        rng: RNG,
        *,
        mode: GenerationMode,
        trend: Trend,
        now: float,
        taken_ids: Container[str] = (),
    ) -> Customer:
        if mode == "typed":
            customer_type = self.pick_customer_type(rng)
            preferences = self.generate_typed(rng, customer_type)
            avatar, type_id = customer_type.avatar, customer_type.id
        elif mode == "ad_hoc":
            preferences = self.generate(rng, trend)
            avatar, type_id = AD_HOC_AVATAR, AD_HOC_TYPE
        else:
            raise ValueError(f"Unsupported generation mode '{mode}'.")
        customer = Customer(
            id=make_instance_id("customer", rng, taken_ids),
            avatar=avatar,
            preferences=preferences,
            entered_at=now,
            customer_type=type_id,
        )
        logger.debug(
            "Generated %s customer %s (%s) liking %s, budget %d-%d",
            mode,
            customer.id,
            type_id,
            sorted(preferences.liked_product_types),
            preferences.budget.min,
            preferences.budget.max,
        )
        return customer


def _union(first: Sequence[str], second: Sequence[str]) -> List[str]:
    return list(dict.fromkeys([*first, *second]))


def _draw(rng: RNG, pool: Sequence[str], single_chance: float) -> List[str]:
    count = 1 if rng.random() < single_chance else 2
    return rng.sample(pool, min(count, len(pool)))
