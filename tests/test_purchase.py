from __future__ import annotations

import pytest

from cozyshop.domain.defs import ArtAnchorDef, ProductTemplateDef
from cozyshop.domain.inventory import Product
from cozyshop.domain.purchase import (
    PurchaseDecisionEngine,
    exploratory_probability,
    shop_floor_probability,
)
from tests.helpers.shop_builders import ScriptedRNG, preferences

MUG = ProductTemplateDef(id="mug", name="Mug", base_price=8, art_anchor=ArtAnchorDef(0, 0, 10, 10))


def _mug(price: int) -> Product:
    return Product(id="p1", template_id="mug", name="Mug", price=price, artwork_ref="art", created_at=0.0)


def test_shop_floor_liked_and_comfortable_price() -> None:
    assert shop_floor_probability(_mug(8), preferences(["mug"])) == pytest.approx(0.9)


def test_shop_floor_bonuses_are_independent() -> None:
    assert shop_floor_probability(_mug(13), preferences(["mug"])) == pytest.approx(0.8)
    assert shop_floor_probability(_mug(8), preferences(["tote"])) == pytest.approx(0.8)
    assert shop_floor_probability(_mug(13), preferences(["tote"])) == pytest.approx(0.7)


def test_exploratory_is_clamped_to_ceiling() -> None:
    assert exploratory_probability(_mug(5), MUG, preferences(["mug"])) == pytest.approx(0.95)


def test_exploratory_inside_budget() -> None:
    # score 1.7, bonus 0.1 * 7 / 10
    assert exploratory_probability(_mug(8), MUG, preferences(["tote"])) == pytest.approx(0.74)


def test_exploratory_over_budget_is_pinned_to_floor() -> None:
    assert exploratory_probability(_mug(16), MUG, preferences(["mug"])) == pytest.approx(0.05)


def test_decide_compares_roll_against_probability() -> None:
    prefs = preferences(["mug"])
    buying = PurchaseDecisionEngine(ScriptedRNG(rolls=[0.89]))
    declining = PurchaseDecisionEngine(ScriptedRNG(rolls=[0.9]))

    assert buying.decide("shop_floor", _mug(8), MUG, prefs)
    assert not declining.decide("shop_floor", _mug(8), MUG, prefs)


def test_unknown_policy_rejected() -> None:
    with pytest.raises(ValueError):
        PurchaseDecisionEngine.probability("haggle", _mug(8), MUG, preferences())  # type: ignore[arg-type]
