from cozyshop.core.rng import RNG
from cozyshop.domain.settings import SimulationSettings
from cozyshop.services.factories import create_session, make_instance_id


def test_create_session_uses_settings() -> None:
    session = create_session(7, SimulationSettings(display_capacity=3, starting_coins=40))

    assert session.day == 1
    assert session.wallet.coins == 40
    assert session.displays.capacity == 3
    assert len(session.inventory) == 0
    assert not session.shop_open
    assert session.trend.popular_product_types == ("mug", "tote")


def test_same_seed_sessions_draw_the_same_numbers() -> None:
    assert create_session(7).rng.random() == create_session(7).rng.random()


def test_make_instance_id_skips_taken_ids() -> None:
    first = make_instance_id("product", RNG(1))
    second = make_instance_id("product", RNG(1), {first})

    assert first.startswith("product_")
    assert second != first
