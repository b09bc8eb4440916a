from __future__ import annotations

import pytest

from cozyshop.domain.defs import ArtAnchorDef, ProductTemplateDef
from cozyshop.domain.inventory import Product
from cozyshop.domain.matching import best_match, is_eligible, price_term, score_product
from tests.helpers.shop_builders import preferences

MUG = ProductTemplateDef(id="mug", name="Mug", base_price=8, art_anchor=ArtAnchorDef(0, 0, 10, 10))
TOTE = ProductTemplateDef(id="tote", name="Tote Bag", base_price=12, art_anchor=ArtAnchorDef(0, 0, 10, 10))


def _product(product_id: str, template: ProductTemplateDef, price: int) -> Product:
    return Product(
        id=product_id,
        template_id=template.id,
        name=template.name,
        price=price,
        artwork_ref="art",
        created_at=0.0,
    )


def test_bargain_price_scores_type_bonus_plus_two() -> None:
    mug = _product("p1", MUG, 5)

    assert score_product(mug, MUG, preferences(["mug"])) == 5
    assert score_product(mug, MUG, preferences(["tote"])) == 2


def test_price_inside_budget_interpolates() -> None:
    mug = _product("p1", MUG, 8)

    assert score_product(mug, MUG, preferences(["mug"])) == pytest.approx(4.7)
    assert score_product(mug, MUG, preferences(["tote"])) == pytest.approx(1.7)


def test_price_term_reaches_one_at_budget_max() -> None:
    assert price_term(15, preferences()) == pytest.approx(1.0)
    assert price_term(16, preferences()) == -2


def test_over_budget_is_negative_even_when_liked() -> None:
    for price in (16, 20, 99):
        product = _product("p1", MUG, price)
        assert score_product(product, MUG, preferences(["mug"])) < 0


def test_best_match_picks_highest_score() -> None:
    cheap_tote = _product("p1", TOTE, 12)
    cheap_mug = _product("p2", MUG, 6)

    chosen = best_match([(cheap_tote, TOTE), (cheap_mug, MUG)], preferences(["mug"]))

    assert chosen is cheap_mug


def test_best_match_first_wins_ties() -> None:
    first = _product("p1", MUG, 5)
    second = _product("p2", MUG, 5)

    assert best_match([(first, MUG), (second, MUG)], preferences()) is first


def test_best_match_never_selects_over_budget_products() -> None:
    pricey = _product("p1", MUG, 40)

    assert best_match([(pricey, MUG)], preferences(["mug"])) is None
    assert best_match([], preferences()) is None


def test_is_eligible_requires_liked_type_and_affordable_price() -> None:
    prefs = preferences(["mug"])

    assert is_eligible(_product("p1", MUG, 15), prefs)
    assert not is_eligible(_product("p2", MUG, 16), prefs)
    assert not is_eligible(_product("p3", TOTE, 12), prefs)
