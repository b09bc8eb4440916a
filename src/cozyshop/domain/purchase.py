"""Probabilistic purchase decisions.

Two policies exist side by side:

``exploratory``
    Used when the player hand-picks a product for a waiting customer.
    ``p = clamp(0.05, 0.95, 0.5 + 0.1 * score + price_bonus)`` where the bonus
    is ``0.2`` for a bargain and shrinks linearly towards the top of the
    budget. Anything over budget is pinned to ``0.05``.

``shop_floor``
    Used when a browsing customer reaches the till during a shop day.
    ``p = 0.7 + 0.1 * [liked type] + 0.1 * [price <= 0.8 * budget.max]``.
"""
from __future__ import annotations

from cozyshop.core.rng import RNG
from cozyshop.core.types import PurchasePolicy
from cozyshop.domain.customer import CustomerPreferences
from cozyshop.domain.defs import ProductTemplateDef
from cozyshop.domain.inventory import Product
from cozyshop.domain.matching import score_product

EXPLORATORY_BASE = 0.5
EXPLORATORY_FLOOR = 0.05
EXPLORATORY_CEILING = 0.95
SHOP_FLOOR_BASE = 0.7
SHOP_FLOOR_BONUS = 0.1
COMFORTABLE_PRICE_RATIO = 0.8


def exploratory_probability(
    product: Product, template: ProductTemplateDef, preferences: CustomerPreferences
) -> float:
    budget = preferences.budget
    if product.price > budget.max:
        return EXPLORATORY_FLOOR
    if product.price <= budget.min:
        price_bonus = 0.2
    else:
        price_bonus = 0.1 * (budget.max - product.price) / (budget.max - budget.min)
    probability = EXPLORATORY_BASE + 0.1 * score_product(product, template, preferences) + price_bonus
    return max(EXPLORATORY_FLOOR, min(EXPLORATORY_CEILING, probability))


def shop_floor_probability(product: Product, preferences: CustomerPreferences) -> float:
    probability = SHOP_FLOOR_BASE
    if preferences.likes_type(product.template_id):
        probability += SHOP_FLOOR_BONUS
    if product.price <= preferences.budget.max * COMFORTABLE_PRICE_RATIO:
        probability += SHOP_FLOOR_BONUS
    return probability


class PurchaseDecisionEngine:
    """Rolls the RNG against a policy's purchase probability."""

    def __init__(self, rng: RNG) -> None:
        self._rng = rng

    @staticmethod
    def probability(
        policy: PurchasePolicy,
        product: Product,
        template: ProductTemplateDef,
        preferences: CustomerPreferences,
    ) -> float:
        if policy == "exploratory":
            return exploratory_probability(product, template, preferences)
        if policy == "shop_floor":
            return shop_floor_probability(product, preferences)
        raise ValueError(f"Unsupported purchase policy '{policy}'.")

    def decide(
        self,
        policy: PurchasePolicy,
        product: Product,
        template: ProductTemplateDef,
        preferences: CustomerPreferences,
    ) -> bool:
        return self._rng.random() < self.probability(policy, product, template, preferences)
