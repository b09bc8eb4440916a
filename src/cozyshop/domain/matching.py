"""Product-to-customer match scoring.

Scores combine a flat bonus for a liked product type with a price term that
rewards cheap items and penalizes anything over budget:

* ``+3`` when the template is one of the customer's liked types.
* ``-2`` flat when the price exceeds ``budget.max``, whatever the type.
* ``+2`` when the price is at or below ``budget.min``.
* otherwise ``1 + (max - price) / (max - min)``, sliding from ``2`` at the
  bottom of the budget down to ``1`` at the top.

Color preferences are not scored; artwork colors are not analysed.
"""
from __future__ import annotations

from typing import Iterable, Tuple

from cozyshop.domain.customer import CustomerPreferences
from cozyshop.domain.defs import ProductTemplateDef
from cozyshop.domain.inventory import Product

LIKED_TYPE_BONUS = 3.0
OVER_BUDGET_PENALTY = -2.0
BARGAIN_BONUS = 2.0


def price_term(price: float, preferences: CustomerPreferences) -> float:
    budget = preferences.budget
    if price > budget.max:
        return OVER_BUDGET_PENALTY
    if price <= budget.min:
        return BARGAIN_BONUS
    return 1.0 + (budget.max - price) / (budget.max - budget.min)


def score_product(
    product: Product, template: ProductTemplateDef, preferences: CustomerPreferences
) -> float:
    if product.price > preferences.budget.max:
        # reject band: no type bonus lifts an unaffordable product above zero
        return OVER_BUDGET_PENALTY
    score = price_term(product.price, preferences)
    if preferences.likes_type(template.id):
        score += LIKED_TYPE_BONUS
    return score


def best_match(
    candidates: Iterable[Tuple[Product, ProductTemplateDef]], preferences: CustomerPreferences
) -> Product | None:
    """Return the highest-scoring product, first wins ties, None unless the score is positive."""
    best: Product | None = None
    best_score = 0.0
    for product, template in candidates:
        score = score_product(product, template, preferences)
        if best is None or score > best_score:
            best, best_score = product, score
    if best is None or best_score <= 0:
        return None
    return best


def is_eligible(product: Product, preferences: CustomerPreferences) -> bool:
    """Browsing filter: a liked product type the customer can afford."""
    return preferences.likes_type(product.template_id) and product.price <= preferences.budget.max
