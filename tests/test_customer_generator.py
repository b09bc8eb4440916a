from __future__ import annotations

from pathlib import Path

import pytest

from cozyshop.core.rng import RNG
from cozyshop.domain.state import Trend
from cozyshop.data.repositories import CustomerTypesRepository, PaletteRepository, ProductTemplatesRepository
from cozyshop.services.customer_generator import CustomerGenerator
from tests.helpers.shop_builders import build_generator, make_definitions_dir


def _shipped_generator() -> CustomerGenerator:
    products_repo = ProductTemplatesRepository()
    palette_repo = PaletteRepository()
    return CustomerGenerator(
        products_repo=products_repo,
        palette_repo=palette_repo,
        customer_types_repo=CustomerTypesRepository(products_repo=products_repo, palette_repo=palette_repo),
    )


def test_ad_hoc_preferences_hold_ranges_across_seeds() -> None:
    generator = _shipped_generator()
    trend = Trend()
    for seed in range(200):
        prefs = generator.generate(RNG(seed), trend)
        assert 1 <= len(prefs.liked_product_types) <= 2
        assert 1 <= len(prefs.liked_colors) <= 2
        assert 5 <= prefs.budget.min <= 9
        assert 15 <= prefs.budget.max <= 29
        assert prefs.budget.min < prefs.budget.max
        assert 10 <= prefs.patience_seconds <= 19


def test_ad_hoc_types_come_from_trend_or_catalog() -> None:
    generator = _shipped_generator()
    catalog = {"mug", "tote", "shirt", "poster"}
    for seed in range(50):
        prefs = generator.generate(RNG(seed), Trend(popular_product_types=("poster",)))
        assert prefs.liked_product_types <= catalog


def test_same_seed_generates_same_customer() -> None:
    generator = _shipped_generator()
    first = generator.create_customer(RNG(9), mode="ad_hoc", trend=Trend(), now=0.0)
    second = generator.create_customer(RNG(9), mode="ad_hoc", trend=Trend(), now=0.0)

    assert first.id == second.id
    assert first.preferences == second.preferences
    assert first.customer_type == "wanderer"


def test_typed_customers_use_archetype_budget_and_patience() -> None:
    types_repo = CustomerTypesRepository(products_repo=ProductTemplatesRepository(), palette_repo=PaletteRepository())
    generator = _shipped_generator()
    for seed in range(100):
        rng = RNG(seed)
        customer = generator.create_customer(rng, mode="typed", trend=Trend(), now=4.0)
        archetype = types_repo.get(customer.customer_type)
        prefs = customer.preferences
        assert prefs.budget == archetype.budget
        assert prefs.patience_seconds == archetype.patience_seconds
        assert prefs.liked_product_types <= set(archetype.product_types)
        assert 1 <= len(prefs.liked_product_types) <= 2
        assert 1 <= len(prefs.liked_colors) <= 2
        assert customer.avatar == archetype.avatar
        assert customer.entered_at == 4.0


def test_weighted_pick_covers_every_archetype() -> None:
    generator = _shipped_generator()
    rng = RNG(5)
    picked = {generator.pick_customer_type(rng).id for _ in range(300)}

    assert picked == {"artsy", "casual", "trendy"}


def test_single_archetype_fixture(tmp_path: Path) -> None:
    generator = build_generator(make_definitions_dir(tmp_path))
    customer = generator.create_customer(RNG(1), mode="typed", trend=Trend(), now=0.0)

    assert customer.customer_type == "regular"
    assert customer.preferences.liked_product_types == frozenset({"mug"})


def test_generated_ids_avoid_taken_ids(tmp_path: Path) -> None:
    generator = build_generator(make_definitions_dir(tmp_path))
    taken = {generator.create_customer(RNG(2), mode="ad_hoc", trend=Trend(), now=0.0).id}

    customer = generator.create_customer(RNG(2), mode="ad_hoc", trend=Trend(), now=0.0, taken_ids=taken)

    assert customer.id not in taken


def test_unknown_mode_rejected(tmp_path: Path) -> None:
    generator = build_generator(make_definitions_dir(tmp_path))
    with pytest.raises(ValueError):
        generator.create_customer(RNG(1), mode="vip", trend=Trend(), now=0.0)  # type: ignore[arg-type]
